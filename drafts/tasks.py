import logging

import requests
from celery import shared_task
from django.conf import settings

from draftdesk.exceptions import (
    DraftDeskError,
    RateLimited,
    TransportError,
    Unauthorized,
    UpstreamError,
    ValidationFailure,
)
from draftdesk.health import send_health_check_message
from .generator import generate_draft


logger = logging.getLogger(__name__)


def post_draft_trigger(record, authorization):
    """POST the record to the draft trigger webhook under a bounded deadline."""
    timeout = settings.DRAFT_TRIGGER_TIMEOUT_MS / 1000

    try:
        response = requests.post(
            settings.DRAFT_TRIGGER_URL,
            json={'record': record},
            headers={'Authorization': authorization},
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        raise TransportError(f"Draft trigger request failed: {e}") from e

    if response.status_code == 200:
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Draft trigger returned a non-JSON body: {e}") from e

    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    if response.status_code == 429:
        try:
            retry_after = int(body.get('retry_after') or settings.GEMINI_RETRY_AFTER)
        except (TypeError, ValueError) as e:
            raise UpstreamError(f"Draft trigger returned an unusable retry_after: {body.get('retry_after')!r}") from e
        raise RateLimited(body.get('details'), retry_after=retry_after)
    if response.status_code == 401:
        raise Unauthorized()
    if response.status_code == 400:
        raise ValidationFailure(body.get('details'))
    raise UpstreamError(f"Draft trigger returned HTTP {response.status_code}: {body.get('details')}")


# Retries are bounded by DRAFT_TRIGGER_MAX_RETRIES in the task body
@shared_task(bind=True, max_retries=None)
def request_draft_generation(self, record):
    """
    Fire-and-forget draft generation for one freshly ingested news item.

    Quota exhaustion is redelivered by the scheduler; every other failure is
    logged and alerted and ends here.
    """

    authorization = f"Bearer {settings.WEBHOOK_SECRET_KEY}"
    news_id = record.get('id') if isinstance(record, dict) else None

    try:
        if settings.DRAFT_TRIGGER_URL:
            result = post_draft_trigger(record, authorization)
        else:
            generated = generate_draft(record, authorization)
            result = {'draft_id': generated.draft.id, 'insight': generated.insight}
    except RateLimited as e:
        if self.request.retries >= settings.DRAFT_TRIGGER_MAX_RETRIES:
            logger.error(f"Giving up on draft for news item {news_id} after {self.request.retries} retries")
            send_health_check_message(f"ERROR: Draft generation for news item {news_id} kept hitting the rate limit.")
            return e.as_dict()
        logger.warning(f"Draft generation for news item {news_id} rate limited, retrying in {e.retry_after}s")
        raise self.retry(exc=e, countdown=e.retry_after)
    except DraftDeskError as e:
        logger.error(f"Draft generation for news item {news_id} failed: {e.detail}")
        send_health_check_message(f"ERROR: Draft generation for news item {news_id} failed. " + str(e.as_dict()))
        return e.as_dict()

    logger.info(f"Draft generated for news item {news_id}")
    return result
