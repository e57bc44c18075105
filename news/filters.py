import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Set

from .models import NewsItem


logger = logging.getLogger(__name__)


VOTE_CATEGORIES = ('positive', 'negative', 'important', 'saved', 'lol')

EXTERNAL_ID_MAX_LENGTH = NewsItem._meta.get_field('external_id').max_length
TITLE_MAX_LENGTH = NewsItem._meta.get_field('title').max_length
URL_MAX_LENGTH = NewsItem._meta.get_field('url').max_length
SOURCE_NAME_MAX_LENGTH = NewsItem._meta.get_field('source_name').max_length

STATUS_OK = 'ok'
STATUS_NO_CANDIDATES = 'no_candidates'
STATUS_NOTHING_ADMISSIBLE = 'nothing_admissible'


@dataclass
class FilterResult:
    status: str
    threshold: int
    admissible: List[Dict] = field(default_factory=list)
    fetched: int = 0
    missing_id: int = 0
    already_existed: int = 0
    below_threshold: int = 0
    batch_duplicates: int = 0

    def counts(self) -> Dict:
        return {
            'status': self.status,
            'fetched': self.fetched,
            'missing_id': self.missing_id,
            'already_existed': self.already_existed,
            'below_threshold': self.below_threshold,
            'batch_duplicates': self.batch_duplicates,
            'threshold': self.threshold,
        }


def normalize_external_id(value) -> Optional[str]:
    """
    Canonical string form of an upstream identifier.

    The feed has served ids as both numbers and strings, so 123, 123.0,
    "123" and " 123 " all normalize to "123". Returns None when there is
    no usable id.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, float):
        if not value.is_integer():
            return repr(value)
        value = int(value)

    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            value = int(value)

    normalized = str(value).strip()
    if normalized.isascii() and normalized.isdigit():
        normalized = str(int(normalized))
    return normalized or None


def vote_total(votes) -> Optional[int]:
    """
    Sum of every vote category; missing or non-numeric categories count as 0.
    Returns None when the candidate carries no vote object at all.
    """
    if not isinstance(votes, dict):
        return None

    total = 0
    for category in VOTE_CATEGORIES:
        count = votes.get(category)
        if isinstance(count, bool):
            continue
        try:
            total += max(int(count or 0), 0)
        except (TypeError, ValueError):
            continue
    return total


def passes_threshold(votes, threshold: int) -> bool:
    total = vote_total(votes)
    # No vote object at all is admitted by policy
    if total is None:
        return True
    return total >= threshold


def existing_external_ids(external_ids: Iterable[str]) -> Set[str]:
    """One batched lookup of identifiers already stored."""
    ids = list(external_ids)
    if not ids:
        return set()
    return set(
        NewsItem.objects.filter(external_id__in=ids).values_list('external_id', flat=True)
    )


def to_news_record(candidate: Dict, external_id: str) -> Dict:
    source = candidate.get('source')
    source_name = source.get('title') if isinstance(source, dict) else None
    sentiment = candidate.get('sentiment')

    # Oversized urls are dropped, never cut off
    url = str(candidate.get('url') or '')
    if len(url) > URL_MAX_LENGTH:
        url = ''

    return {
        'external_id': external_id,
        'title': str(candidate.get('title') or 'Untitled')[:TITLE_MAX_LENGTH],
        'url': url,
        'source_name': str(source_name or 'Unknown')[:SOURCE_NAME_MAX_LENGTH],
        'upvote_count': vote_total(candidate.get('votes')) or 0,
        'sentiment': str(sentiment).strip().lower() if sentiment else 'neutral',
    }


def filter_candidates(candidates: List[Dict], threshold: int,
                      lookup: Callable[[Iterable[str]], Set[str]] = existing_external_ids) -> FilterResult:
    """
    Reduce raw feed candidates to the minimal set worth inserting.

    Args:
        candidates (list): Raw records from the upstream feed
        threshold (int): Minimum summed vote count, inclusive
        lookup (callable): Returns the subset of the given ids already stored

    Returns:
        FilterResult: admissible records plus per-stage counters
    """

    result = FilterResult(status=STATUS_OK, threshold=threshold, fetched=len(candidates or []))

    if not candidates:
        logger.info("No candidates returned from feed")
        result.status = STATUS_NO_CANDIDATES
        return result

    normalized = []
    for candidate in candidates:
        if not isinstance(candidate, dict):
            result.missing_id += 1
            continue
        external_id = normalize_external_id(candidate.get('id'))
        if external_id is None or len(external_id) > EXTERNAL_ID_MAX_LENGTH:
            result.missing_id += 1
            continue
        normalized.append((external_id, candidate))

    existing = lookup({external_id for external_id, _ in normalized})

    fresh = []
    for external_id, candidate in normalized:
        if external_id in existing:
            result.already_existed += 1
            continue
        fresh.append((external_id, candidate))

    engaged = []
    for external_id, candidate in fresh:
        if not passes_threshold(candidate.get('votes'), threshold):
            result.below_threshold += 1
            continue
        engaged.append((external_id, candidate))

    # Last occurrence wins, first occurrence keeps its position
    unique = {}
    for external_id, candidate in engaged:
        if external_id in unique:
            result.batch_duplicates += 1
        unique[external_id] = candidate

    result.admissible = [to_news_record(candidate, external_id) for external_id, candidate in unique.items()]

    if not result.admissible:
        result.status = STATUS_NOTHING_ADMISSIBLE
        logger.info(
            f"Nothing admissible: fetched={result.fetched}, "
            f"already_existed={result.already_existed}, threshold={threshold}"
        )

    return result
