import logging
from typing import NamedTuple, Optional, Tuple, Union

from django.conf import settings
from django.db.models import F

from .models import Draft


logger = logging.getLogger(__name__)


DEFAULT_LEARNING_CONTEXT = "None available yet. Use a standard expert crypto persona."


class LearningExample(NamedTuple):
    rank: int
    score: Optional[float]
    text: str


class NoHistory:
    """Returned when no approved draft exists yet."""

    def __bool__(self):
        return False

    def __repr__(self):
        return 'NO_HISTORY'


NO_HISTORY = NoHistory()


def select_learning_examples(limit: Optional[int] = None) -> Union[Tuple[LearningExample, ...], NoHistory]:
    """
    Top approved drafts by engagement score, best first.

    Drafts without a score sort after every scored draft, newest approval
    first among equals.
    """
    if limit is None:
        limit = settings.LEARNING_SAMPLE_SIZE

    rows = (
        Draft.objects
        .filter(final_approved_text__isnull=False)
        .order_by(F('engagement_score').desc(nulls_last=True), '-approved_at')
        .values_list('final_approved_text', 'engagement_score')[:limit]
    )

    examples = tuple(
        LearningExample(rank=index, score=score, text=text)
        for index, (text, score) in enumerate(rows, start=1)
    )

    if not examples:
        return NO_HISTORY

    logger.info(f"Found {len(examples)} successful posts for learning context")
    return examples


def format_learning_context(examples) -> str:
    if examples is NO_HISTORY or not examples:
        return DEFAULT_LEARNING_CONTEXT

    return '\n---\n'.join(
        f'Successful Post {example.rank} (Score: {_format_score(example.score)}): "{example.text}"'
        for example in examples
    )


def _format_score(score):
    if score is None:
        return 'unscored'
    if float(score).is_integer():
        return str(int(score))
    return f"{score:.2f}"
