import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('news', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Draft',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('insight_text', models.TextField(help_text='Short analytical takeaway shown to the reviewer', verbose_name='Insight')),
                ('draft_text', models.TextField(help_text='The generated candidate post', verbose_name='Draft Post')),
                ('final_approved_text', models.TextField(blank=True, help_text='Reviewer-edited text, set on approval', null=True, verbose_name='Final Approved Post')),
                ('is_reviewed', models.BooleanField(db_index=True, default=False, verbose_name='Reviewed')),
                ('approved_at', models.DateTimeField(blank=True, null=True, verbose_name='Approved At')),
                ('engagement_score', models.FloatField(blank=True, help_text='Observed performance after publishing, filled in externally', null=True, verbose_name='Engagement Score')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created At')),
                ('news', models.ForeignKey(help_text='The news item this draft reacts to', on_delete=django.db.models.deletion.CASCADE, related_name='drafts', to='news.newsitem', verbose_name='News Item')),
            ],
            options={
                'verbose_name': 'Draft',
                'verbose_name_plural': 'Drafts',
                'ordering': ['-created_at'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(('approved_at__isnull', True), ('final_approved_text__isnull', True), ('is_reviewed', False)),
                            models.Q(('approved_at__isnull', False), ('final_approved_text__isnull', False), ('is_reviewed', True)),
                            _connector='OR',
                        ),
                        name='draft_review_fields_consistent',
                    ),
                ],
            },
        ),
    ]
