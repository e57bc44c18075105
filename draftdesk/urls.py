"""
URL configuration for draftdesk project.

The ingestion and draft-trigger endpoints are called by schedulers and
webhooks; everything under /api/drafts/ is the review dashboard surface and
sits behind the dashboard access gate.
"""
from django.contrib import admin
from django.urls import include, path
from drafts.views import generate_draft_view


urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/collect-news/', include('news.urls')),
    path('api/generate-draft/', generate_draft_view, name='generate_draft'),
    path('api/drafts/', include('drafts.urls')),
]
