from django.db import models


class NewsItem(models.Model):
    external_id = models.CharField(max_length=64, unique=True)
    title = models.CharField(max_length=500)
    url = models.URLField(max_length=1000, blank=True, default='')
    source_name = models.CharField(max_length=255, default='Unknown')

    # Summed engagement across every vote category at ingestion time
    upvote_count = models.PositiveIntegerField(default=0)

    sentiment = models.CharField(max_length=32, default='neutral')

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='news_newsit_created_4d1c2e_idx'),
            models.Index(fields=['sentiment'], name='news_newsit_sentime_9b7a1f_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.external_id})"
