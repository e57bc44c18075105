from rest_framework import serializers
from .models import NewsItem


class NewsItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = NewsItem
        fields = [
            'id',
            'external_id',
            'title',
            'url',
            'source_name',
            'upvote_count',
            'sentiment',
            'created_at',
        ]
