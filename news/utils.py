import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Set

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction

from draftdesk.exceptions import PersistenceConflict, PersistenceFailure
from drafts.tasks import request_draft_generation
from .client import get_feed_client
from .filters import existing_external_ids, filter_candidates
from .models import NewsItem
from .serializers import NewsItemSerializer


logger = logging.getLogger(__name__)


@dataclass
class IngestionCounters:
    inserted: int = 0
    duplicates_skipped: int = 0
    failed: int = 0
    draft_trigger_failures: int = 0


def enqueue_draft_generation(item: NewsItem):
    """Hand a persisted news item to the draft generation task queue."""
    request_draft_generation.delay(dict(NewsItemSerializer(item).data))


# INSERT ONE ADMISSIBLE RECORD
def insert_news_item(record: Dict) -> NewsItem:
    """
    Insert one admissible record in its own transaction.

    Raises:
        PersistenceConflict: the external id was stored by a concurrent run
        PersistenceFailure: any other storage error
    """
    try:
        with transaction.atomic():
            return NewsItem.objects.create(**record)
    except IntegrityError as e:
        if NewsItem.objects.filter(external_id=record['external_id']).exists():
            raise PersistenceConflict(f"News item {record['external_id']} already exists.") from e
        raise PersistenceFailure(str(e)) from e
    except DatabaseError as e:
        raise PersistenceFailure(str(e)) from e


def save_news_items(records: List[Dict],
                    trigger: Optional[Callable[[NewsItem], None]] = None) -> IngestionCounters:
    """
    Persist admissible records one by one and trigger drafting for each insert.

    Args:
        records (list): Admissible NewsItem-shaped dicts
        trigger (callable, optional): Fire-and-forget handoff for each
                                      persisted item. Defaults to the Celery
                                      draft generation task.

    Returns:
        IngestionCounters: inserted, duplicates_skipped, failed, draft_trigger_failures
    """

    trigger = trigger or enqueue_draft_generation
    counters = IngestionCounters()

    for record in records:
        try:
            item = insert_news_item(record)
        except PersistenceConflict:
            counters.duplicates_skipped += 1
            logger.warning(f"News item {record['external_id']} inserted concurrently, skipping")
            continue
        except PersistenceFailure as e:
            counters.failed += 1
            logger.error(f"Failed to save news item {record['external_id']}: {e.detail}")
            continue

        counters.inserted += 1
        logger.info(f"Saved news item {item.id} ({item.external_id}): {item.title[:50]}")

        try:
            trigger(item)
        except Exception as e:
            counters.draft_trigger_failures += 1
            logger.exception(f"Failed to trigger draft generation for news item {item.id}: {e}")

    return counters


# ONE INGESTION RUN: FETCH, FILTER, SAVE
def sync_trending_news(client=None, threshold: Optional[int] = None,
                       lookup: Callable[[Iterable[str]], Set[str]] = existing_external_ids,
                       trigger: Optional[Callable[[NewsItem], None]] = None) -> Dict:
    """
    Fetch the hot news feed, filter it and store whatever is new

    Args:
        client (optional): Feed client exposing ``fetch_hot_news()``.
                           If None, builds one from settings.
        threshold (int, optional): Engagement threshold. If None, uses
                                   settings.ENGAGEMENT_THRESHOLD.
        lookup (callable): Batched existing-id query
        trigger (callable, optional): Draft generation handoff

    Returns:
        dict: Counters describing the run (see FilterResult.counts and
              IngestionCounters)

    Raises:
        UpstreamUnavailable: the feed could not be fetched
        ConfigMissing: the feed credential is not configured
        PersistenceFailure: the existing-id lookup failed
    """

    if client is None:
        client = get_feed_client()

    if threshold is None:
        threshold = settings.ENGAGEMENT_THRESHOLD

    candidates = client.fetch_hot_news()

    try:
        filtered = filter_candidates(candidates, threshold=threshold, lookup=lookup)
    except DatabaseError as e:
        logger.error(f"Existing id lookup failed: {e}")
        raise PersistenceFailure(str(e)) from e

    counters = save_news_items(filtered.admissible, trigger=trigger)

    report = filtered.counts()
    report.update({
        'inserted': counters.inserted,
        'skipped_duplicates': counters.duplicates_skipped,
        'failed': counters.failed,
        'draft_trigger_failures': counters.draft_trigger_failures,
    })

    logger.info(f"News sync complete: {report}")
    return report

