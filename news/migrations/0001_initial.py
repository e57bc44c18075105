from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='NewsItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('external_id', models.CharField(max_length=64, unique=True)),
                ('title', models.CharField(max_length=500)),
                ('url', models.URLField(blank=True, default='', max_length=1000)),
                ('source_name', models.CharField(default='Unknown', max_length=255)),
                ('upvote_count', models.PositiveIntegerField(default=0)),
                ('sentiment', models.CharField(default='neutral', max_length=32)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['-created_at'], name='news_newsit_created_4d1c2e_idx'),
                    models.Index(fields=['sentiment'], name='news_newsit_sentime_9b7a1f_idx'),
                ],
            },
        ),
    ]
