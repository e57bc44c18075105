from rest_framework import serializers
from .models import Draft


class NewsRecordSerializer(serializers.Serializer):
    """The ``record`` object delivered to the draft trigger."""
    id = serializers.IntegerField(required=False)
    external_id = serializers.CharField(required=False, max_length=64)
    title = serializers.CharField(max_length=500, trim_whitespace=True)
    url = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    sentiment = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='neutral')

    def validate(self, attrs):
        if attrs.get('id') is None and not attrs.get('external_id'):
            raise serializers.ValidationError('Record must carry id or external_id.')
        return attrs


class GeneratedDraftSerializer(serializers.Serializer):
    insight = serializers.CharField(trim_whitespace=True)
    draft_tweet = serializers.CharField(trim_whitespace=True)


class ApproveDraftSerializer(serializers.Serializer):
    text = serializers.CharField(trim_whitespace=True)


class DraftSerializer(serializers.ModelSerializer):
    state = serializers.CharField(read_only=True)
    display_text = serializers.CharField(read_only=True)
    news_title = serializers.CharField(source='news.title', read_only=True)
    news_url = serializers.CharField(source='news.url', read_only=True)
    news_source = serializers.CharField(source='news.source_name', read_only=True)

    class Meta:
        model = Draft
        fields = [
            'id',
            'news',
            'news_title',
            'news_url',
            'news_source',
            'insight_text',
            'draft_text',
            'final_approved_text',
            'display_text',
            'state',
            'is_reviewed',
            'approved_at',
            'engagement_score',
            'created_at',
        ]
