"""Tests for the dashboard endpoints and their access gate."""

import base64
import json

import pytest

from drafts.models import Draft


def basic(user='reviewer', password='hunter2'):
    token = base64.b64encode(f"{user}:{password}".encode()).decode()
    return f"Basic {token}"


@pytest.fixture
def dashboard(client):

    class Dashboard:

        def get(self, path, **extra):
            return client.get(path, HTTP_AUTHORIZATION=basic(), **extra)

        def post(self, path, body=None):
            return client.post(path, data=json.dumps(body or {}), content_type='application/json',
                               HTTP_AUTHORIZATION=basic())

    return Dashboard()


@pytest.mark.django_db
@pytest.mark.parametrize('authorization', [None, basic(password='wrong'), basic(user='admin'), 'Basic !!!', 'Bearer x'])
def test_gate_refuses_bad_credentials(client, authorization):
    extra = {'HTTP_AUTHORIZATION': authorization} if authorization else {}

    response = client.get('/api/drafts/', **extra)

    assert response.status_code == 401
    assert response['WWW-Authenticate'] == 'Basic realm="Secure Dashboard"'


@pytest.mark.django_db
def test_gate_refuses_everything_when_unconfigured(client, settings):
    settings.DASHBOARD_USER = ''
    settings.DASHBOARD_PASSWORD = ''

    response = client.get('/api/drafts/', HTTP_AUTHORIZATION=basic('', ''))

    assert response.status_code == 401


@pytest.mark.django_db
def test_gate_leaves_trigger_endpoint_alone(client):
    response = client.post('/api/generate-draft/', data='{}', content_type='application/json')

    assert response.status_code == 401
    assert 'WWW-Authenticate' not in response


def test_list_pending_and_approved(dashboard, make_draft):
    pending = make_draft(draft_text='pending text')
    approved = make_draft()
    dashboard.post(f'/api/drafts/{approved.id}/approve/', {'text': 'shipped'})

    pending_body = dashboard.get('/api/drafts/?view=pending').json()
    approved_body = dashboard.get('/api/drafts/?view=approved').json()

    assert [d['id'] for d in pending_body['data']] == [pending.id]
    assert pending_body['data'][0]['display_text'] == 'pending text'
    assert pending_body['data'][0]['news_title'] == pending.news.title
    assert approved_body['count'] == 1
    assert approved_body['data'][0]['final_approved_text'] == 'shipped'
    assert approved_body['data'][0]['state'] == 'approved'


def test_list_defaults_to_pending(dashboard, make_draft):
    make_draft()

    body = dashboard.get('/api/drafts/').json()

    assert body['view'] == 'pending'
    assert body['count'] == 1


def test_list_unknown_view(dashboard, db):
    assert dashboard.get('/api/drafts/?view=everything').status_code == 400


def test_approve_endpoint(dashboard, make_draft):
    draft = make_draft()

    response = dashboard.post(f'/api/drafts/{draft.id}/approve/', {'text': '  edited text  '})

    assert response.status_code == 200
    assert response.json()['data']['final_approved_text'] == 'edited text'
    draft.refresh_from_db()
    assert draft.is_reviewed is True


def test_approve_endpoint_requires_text(dashboard, make_draft):
    draft = make_draft()

    assert dashboard.post(f'/api/drafts/{draft.id}/approve/', {}).status_code == 400


def test_second_approve_is_conflict(dashboard, make_draft):
    draft = make_draft()
    dashboard.post(f'/api/drafts/{draft.id}/approve/', {'text': 'one'})

    response = dashboard.post(f'/api/drafts/{draft.id}/approve/', {'text': 'two'})

    assert response.status_code == 409
    assert response.json()['code'] == 'invalid_transition'


def test_reject_endpoint_deletes(dashboard, make_draft):
    draft = make_draft()

    response = dashboard.post(f'/api/drafts/{draft.id}/reject/')

    assert response.status_code == 200
    assert not Draft.objects.filter(pk=draft.id).exists()
    assert dashboard.post(f'/api/drafts/{draft.id}/approve/', {'text': 'x'}).status_code == 404


def test_reject_approved_is_conflict(dashboard, make_draft):
    draft = make_draft()
    dashboard.post(f'/api/drafts/{draft.id}/approve/', {'text': 'kept'})

    assert dashboard.post(f'/api/drafts/{draft.id}/reject/').status_code == 409


def test_copy_endpoint_tracks_visible_text(dashboard, make_draft):
    draft = make_draft(draft_text='as generated')

    before = dashboard.get(f'/api/drafts/{draft.id}/copy/').json()
    dashboard.post(f'/api/drafts/{draft.id}/approve/', {'text': 'as approved'})
    after = dashboard.get(f'/api/drafts/{draft.id}/copy/').json()

    assert before == {'id': draft.id, 'state': 'pending', 'text': 'as generated'}
    assert after == {'id': draft.id, 'state': 'approved', 'text': 'as approved'}


def test_copy_missing_draft(dashboard, db):
    assert dashboard.get('/api/drafts/999999/copy/').status_code == 404
