from django.contrib import admin
from django.utils.html import format_html
from .models import NewsItem


@admin.register(NewsItem)
class NewsItemAdmin(admin.ModelAdmin):
    list_display = (
        'id',
        'external_id',
        'title_short',
        'source_name',
        'upvote_count',
        'sentiment_colored',
        'created_at',
    )

    list_filter = (
        'sentiment',
        'source_name',
        'created_at',
    )

    search_fields = (
        'external_id',
        'title',
        'source_name',
    )

    readonly_fields = (
        'id',
        'external_id',
        'title',
        'url',
        'source_name',
        'upvote_count',
        'sentiment',
        'created_at',
    )

    date_hierarchy = 'created_at'
    list_per_page = 100
    ordering = ('-created_at',)

    # News items are written by ingestion only
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def title_short(self, obj):
        """Display shortened title"""
        return obj.title[:50] + '...' if len(obj.title) > 50 else obj.title
    title_short.short_description = 'Title'

    def sentiment_colored(self, obj):
        """Display sentiment with color coding"""
        colors = {
            'positive': 'green',
            'negative': 'red',
            'neutral': 'gray',
        }
        color = colors.get(obj.sentiment, 'black')
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.sentiment
        )
    sentiment_colored.short_description = 'Sentiment'
