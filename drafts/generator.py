import hmac
import json
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from django.conf import settings
from django.db import DatabaseError

from draftdesk.exceptions import (
    ConfigMissing,
    GenerationContractViolation,
    PersistenceFailure,
    Unauthorized,
    ValidationFailure,
)
from news.models import NewsItem
from .gemini import get_draft_model
from .learning import DEFAULT_LEARNING_CONTEXT, format_learning_context, select_learning_examples
from .models import Draft
from .prompts import INSTITUTIONAL_ANALYST, PromptTemplate
from .serializers import GeneratedDraftSerializer, NewsRecordSerializer


logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    draft: Draft
    news_item: NewsItem

    @property
    def insight(self) -> str:
        return self.draft.insight_text


def check_webhook_authorization(authorization: Optional[str], secret: Optional[str] = None):
    if secret is None:
        secret = settings.WEBHOOK_SECRET_KEY
    if not secret:
        raise ConfigMissing('WEBHOOK_SECRET_KEY is not set.')

    expected = f"Bearer {secret}"
    if not authorization or not hmac.compare_digest(authorization.encode(), expected.encode()):
        logger.warning("Unauthorized webhook request detected.")
        raise Unauthorized()


def resolve_news_item(record) -> NewsItem:
    """Validate the inbound record and load the persisted news item it names."""
    if not isinstance(record, dict):
        raise ValidationFailure('Invalid payload structure: missing record.')

    serializer = NewsRecordSerializer(data=record)
    if not serializer.is_valid():
        raise ValidationFailure(serializer.errors)

    data = serializer.validated_data
    try:
        if data.get('id') is not None:
            return NewsItem.objects.get(pk=data['id'])
        return NewsItem.objects.get(external_id=data['external_id'])
    except NewsItem.DoesNotExist:
        raise ValidationFailure(f"Unknown news item: {data.get('id') or data.get('external_id')}")
    except DatabaseError as e:
        raise PersistenceFailure(str(e)) from e


def build_learning_context(selector: Callable = select_learning_examples) -> str:
    try:
        return format_learning_context(selector())
    except Exception as e:
        # Learning context only enhances the prompt
        logger.error(f"Error fetching learning context: {e}")
        return DEFAULT_LEARNING_CONTEXT


def parse_model_output(text) -> Dict:
    try:
        data = json.loads(text.strip())
    except (AttributeError, TypeError, ValueError) as e:
        raise GenerationContractViolation('Model output is not valid JSON.') from e

    if not isinstance(data, dict):
        raise GenerationContractViolation('Model output is not a JSON object.')

    serializer = GeneratedDraftSerializer(data=data)
    if not serializer.is_valid():
        raise GenerationContractViolation(f"Model output violates schema: {serializer.errors}")
    return dict(serializer.validated_data)


def generate_draft(record, authorization: Optional[str], model=None,
                   template: PromptTemplate = INSTITUTIONAL_ANALYST,
                   learning_selector: Callable = select_learning_examples,
                   secret: Optional[str] = None) -> GenerationResult:
    """
    Generate and store one pending draft for a persisted news item.

    Args:
        record (dict): The news item as delivered by the trigger
        authorization (str): Raw Authorization header, "Bearer <secret>"
        model (optional): Object exposing ``generate(prompt, schema)``.
                          If None, the configured Gemini model is used.
        template (PromptTemplate): Prompt slots and output bounds
        learning_selector (callable): Source of learning examples
        secret (str, optional): Overrides settings.WEBHOOK_SECRET_KEY

    Returns:
        GenerationResult: the stored draft and its news item

    Raises:
        Unauthorized, ValidationFailure: before any external call is made
        RateLimited: the model is out of quota or timed out; safe to redeliver
        GenerationContractViolation: the model output did not match the schema
        PersistenceFailure: the draft could not be stored
    """

    check_webhook_authorization(authorization, secret)
    news_item = resolve_news_item(record)

    logger.info(f"Processing news item {news_item.id}: {news_item.title}")

    learning_context = build_learning_context(learning_selector)
    prompt = template.render(learning_context, {
        'title': news_item.title,
        'url': news_item.url,
        'sentiment': news_item.sentiment,
    })

    if model is None:
        model = get_draft_model()

    output = parse_model_output(model.generate(prompt, template.response_schema()))

    try:
        draft = Draft.objects.create(
            news=news_item,
            insight_text=output['insight'],
            draft_text=output['draft_tweet'],
        )
    except DatabaseError as e:
        logger.error(
            f"Failed to save draft for news item {news_item.id}: {e}. "
            f"Generated payload: {json.dumps(output)}"
        )
        raise PersistenceFailure(str(e)) from e

    logger.info(f"Draft {draft.id} saved for news item {news_item.id}")
    return GenerationResult(draft=draft, news_item=news_item)
