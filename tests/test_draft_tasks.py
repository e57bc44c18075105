"""Tests for the draft generation trigger task."""

from unittest.mock import MagicMock, patch

import pytest
import requests
from celery.exceptions import Retry

from draftdesk.exceptions import RateLimited, TransportError, UpstreamError
from drafts.models import Draft
from drafts.tasks import post_draft_trigger, request_draft_generation
from .factories import FakeDraftModel


def http_response(status_code, body):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    return response


def test_in_process_generation_when_no_trigger_url(make_news_item):
    item = make_news_item()

    with patch('drafts.generator.get_draft_model', return_value=FakeDraftModel()):
        result = request_draft_generation({'id': item.id, 'title': item.title})

    assert result['draft_id'] == Draft.objects.get().id


def test_posts_record_with_bearer_secret(settings):
    settings.DRAFT_TRIGGER_URL = 'https://drafts.example/api/generate-draft/'
    settings.DRAFT_TRIGGER_TIMEOUT_MS = 12000

    with patch('drafts.tasks.requests.post', return_value=http_response(200, {'insight': 'ok'})) as post:
        result = request_draft_generation({'id': 3, 'title': 'x'})

    assert result == {'insight': 'ok'}
    args, kwargs = post.call_args
    assert args == ('https://drafts.example/api/generate-draft/',)
    assert kwargs['json'] == {'record': {'id': 3, 'title': 'x'}}
    assert kwargs['headers'] == {'Authorization': 'Bearer test-webhook-secret'}
    assert kwargs['timeout'] == 12


def test_trigger_rate_limit_carries_retry_after(settings):
    settings.DRAFT_TRIGGER_URL = 'https://drafts.example/api/generate-draft/'

    with patch('drafts.tasks.requests.post', return_value=http_response(429, {'retry_after': 42})):
        with pytest.raises(RateLimited) as excinfo:
            post_draft_trigger({'id': 1}, 'Bearer s')

    assert excinfo.value.retry_after == 42


def test_trigger_timeout_is_transport_error(settings):
    settings.DRAFT_TRIGGER_URL = 'https://drafts.example/api/generate-draft/'

    with patch('drafts.tasks.requests.post', side_effect=requests.exceptions.Timeout("slow")):
        with pytest.raises(TransportError):
            post_draft_trigger({'id': 1}, 'Bearer s')


def test_trigger_server_error_is_upstream_error(settings):
    settings.DRAFT_TRIGGER_URL = 'https://drafts.example/api/generate-draft/'

    with patch('drafts.tasks.requests.post', return_value=http_response(500, {'details': 'boom'})):
        with pytest.raises(UpstreamError):
            post_draft_trigger({'id': 1}, 'Bearer s')


def test_rate_limit_is_redelivered_by_the_scheduler():
    with patch('drafts.tasks.generate_draft', side_effect=RateLimited(retry_after=30)), \
            patch.object(request_draft_generation, 'retry', side_effect=Retry()) as retry:
        with pytest.raises(Retry):
            request_draft_generation({'id': 1, 'title': 'x'})

    assert retry.call_args.kwargs['countdown'] == 30


def test_other_failures_are_alerted_not_raised():
    with patch('drafts.tasks.generate_draft', side_effect=UpstreamError('model 500')), \
            patch('drafts.tasks.send_health_check_message') as alert:
        result = request_draft_generation({'id': 1, 'title': 'x'})

    assert result['code'] == 'upstream_error'
    alert.assert_called_once()


def test_trigger_non_json_success_body_is_upstream_error(settings):
    settings.DRAFT_TRIGGER_URL = 'https://drafts.example/api/generate-draft/'
    response = http_response(200, None)
    response.json.side_effect = ValueError("Expecting value")

    with patch('drafts.tasks.requests.post', return_value=response):
        with pytest.raises(UpstreamError):
            post_draft_trigger({'id': 1}, 'Bearer s')


def test_trigger_unusable_retry_after_is_upstream_error(settings):
    settings.DRAFT_TRIGGER_URL = 'https://drafts.example/api/generate-draft/'

    with patch('drafts.tasks.requests.post', return_value=http_response(429, {'retry_after': 'soon'})):
        with pytest.raises(UpstreamError):
            post_draft_trigger({'id': 1}, 'Bearer s')


def test_gives_up_and_alerts_after_max_retries(settings):
    settings.DRAFT_TRIGGER_MAX_RETRIES = 5

    with patch('drafts.tasks.generate_draft', side_effect=RateLimited(retry_after=0)) as generate, \
            patch('drafts.tasks.send_health_check_message') as alert:
        result = request_draft_generation.apply(args=({'id': 1, 'title': 'x'},))

    assert generate.call_count == 6
    alert.assert_called_once()
    assert result.state == 'SUCCESS'
    assert result.result['code'] == 'rate_limited'
    assert result.result['retry_after'] == 0
