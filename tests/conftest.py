import pytest

from drafts.models import Draft
from news.models import NewsItem
from .factories import FakeDraftModel


WEBHOOK_SECRET = 'test-webhook-secret'


@pytest.fixture(autouse=True)
def draftdesk_settings(settings):
    settings.WEBHOOK_SECRET_KEY = WEBHOOK_SECRET
    settings.ENGAGEMENT_THRESHOLD = 20
    settings.CRYPTOPANIC_AUTH_TOKEN = 'test-feed-token'
    settings.GEMINI_API_KEY = ''
    settings.DRAFT_TRIGGER_URL = ''
    settings.DASHBOARD_USER = 'reviewer'
    settings.DASHBOARD_PASSWORD = 'hunter2'
    settings.BOT_TOKEN = ''
    settings.HEALTH_CHECK_ID = ''
    return settings


@pytest.fixture
def bearer():
    return f"Bearer {WEBHOOK_SECRET}"


@pytest.fixture
def fake_model():
    return FakeDraftModel()


@pytest.fixture
def make_news_item(db):
    counter = {'n': 0}

    def factory(**overrides):
        counter['n'] += 1
        fields = {
            'external_id': str(1000 + counter['n']),
            'title': f"Bitcoin ETF headline {counter['n']}",
            'url': f"https://example.com/news/{counter['n']}",
            'source_name': 'CoinDesk',
            'upvote_count': 30,
            'sentiment': 'neutral',
        }
        fields.update(overrides)
        return NewsItem.objects.create(**fields)

    return factory


@pytest.fixture
def make_draft(db, make_news_item):

    def factory(news=None, **overrides):
        fields = {
            'news': news or make_news_item(),
            'insight_text': 'Why it matters.',
            'draft_text': 'Generated draft text.',
        }
        fields.update(overrides)
        return Draft.objects.create(**fields)

    return factory
