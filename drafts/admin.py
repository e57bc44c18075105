from django.contrib import admin, messages
from draftdesk.exceptions import DraftDeskError
from .models import Draft
from .review import approve_draft


@admin.register(Draft)
class DraftAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'news', 'state', 'insight_short', 'engagement_score', 'created_at', 'approved_at'
    )
    list_filter = ('is_reviewed', 'created_at', 'approved_at')
    search_fields = ('news__title', 'draft_text', 'final_approved_text')
    readonly_fields = ('news', 'is_reviewed', 'approved_at', 'final_approved_text', 'created_at')
    ordering = ('-created_at',)
    actions = ('approve_selected',)

    def insight_short(self, obj):
        return obj.insight_text[:60] + '...' if len(obj.insight_text) > 60 else obj.insight_text
    insight_short.short_description = 'Insight'

    @admin.action(description="Approve selected drafts as generated")
    def approve_selected(self, request, queryset):
        approved = 0
        for draft in queryset.filter(is_reviewed=False):
            try:
                approve_draft(draft.id, draft.draft_text)
                approved += 1
            except DraftDeskError as e:
                self.message_user(request, f"Draft {draft.id}: {e.detail}", level=messages.ERROR)
        self.message_user(request, f"Approved {approved} draft(s).")
