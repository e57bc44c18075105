from django.db import models
from django.db.models import Q
from news.models import NewsItem


class Draft(models.Model):
    STATE_PENDING = 'pending'
    STATE_APPROVED = 'approved'

    news = models.ForeignKey(
        NewsItem,
        on_delete=models.CASCADE,
        related_name='drafts',
        verbose_name="News Item",
        help_text="The news item this draft reacts to"
    )
    insight_text = models.TextField(
        verbose_name="Insight",
        help_text="Short analytical takeaway shown to the reviewer"
    )
    draft_text = models.TextField(
        verbose_name="Draft Post",
        help_text="The generated candidate post"
    )
    final_approved_text = models.TextField(
        null=True,
        blank=True,
        verbose_name="Final Approved Post",
        help_text="Reviewer-edited text, set on approval"
    )
    is_reviewed = models.BooleanField(
        default=False,
        db_index=True,
        verbose_name="Reviewed"
    )
    approved_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Approved At"
    )
    engagement_score = models.FloatField(
        null=True,
        blank=True,
        verbose_name="Engagement Score",
        help_text="Observed performance after publishing, filled in externally"
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At"
    )

    class Meta:
        verbose_name = "Draft"
        verbose_name_plural = "Drafts"
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(is_reviewed=False, approved_at__isnull=True, final_approved_text__isnull=True)
                    | Q(is_reviewed=True, approved_at__isnull=False, final_approved_text__isnull=False)
                ),
                name='draft_review_fields_consistent',
            ),
        ]

    @property
    def state(self):
        return self.STATE_APPROVED if self.is_reviewed else self.STATE_PENDING

    @property
    def display_text(self):
        return self.final_approved_text if self.is_reviewed else self.draft_text

    def __str__(self):
        return f"Draft {self.id} for {self.news_id} ({self.state})"
