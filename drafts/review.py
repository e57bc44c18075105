import logging
from typing import List, Optional

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from draftdesk.exceptions import DraftNotFound, InvalidTransition, PersistenceFailure, ValidationFailure
from .models import Draft


logger = logging.getLogger(__name__)


VIEW_PENDING = 'pending'
VIEW_APPROVED = 'approved'
VIEWS = (VIEW_PENDING, VIEW_APPROVED)


def list_drafts(view: str, limit: Optional[int] = None) -> List[Draft]:
    if view not in VIEWS:
        raise ValidationFailure(f"Unknown view '{view}'. Expected one of: {', '.join(VIEWS)}")

    if limit is None:
        limit = settings.REVIEW_PAGE_SIZE

    drafts = Draft.objects.select_related('news')
    if view == VIEW_PENDING:
        drafts = drafts.filter(is_reviewed=False).order_by('-created_at', '-id')
    else:
        drafts = drafts.filter(is_reviewed=True).order_by('-approved_at', '-id')

    try:
        return list(drafts[:limit])
    except DatabaseError as e:
        raise PersistenceFailure(str(e)) from e


def _not_pending(draft_id) -> Exception:
    if Draft.objects.filter(pk=draft_id).exists():
        return InvalidTransition(f"Draft {draft_id} is already approved.")
    return DraftNotFound(f"Draft {draft_id} does not exist.")


def approve_draft(draft_id, text: str) -> Draft:
    """
    pending -> approved. Stores the (possibly edited) text and stamps the approval time.

    A single conditional UPDATE decides the transition, so a draft approved
    or rejected by a concurrent action is never approved twice.
    """
    text = (text or '').strip()
    if not text:
        raise ValidationFailure('Approved text must not be empty.')

    try:
        updated = Draft.objects.filter(pk=draft_id, is_reviewed=False).update(
            final_approved_text=text,
            is_reviewed=True,
            approved_at=timezone.now(),
        )
        if not updated:
            raise _not_pending(draft_id)
        draft = Draft.objects.select_related('news').get(pk=draft_id)
    except DatabaseError as e:
        logger.error(f"Error approving draft {draft_id}: {e}")
        raise PersistenceFailure(str(e)) from e

    logger.info(f"Draft {draft_id} approved")
    return draft


def reject_draft(draft_id):
    """pending -> deleted. The draft is removed outright and never used for learning."""
    try:
        deleted, _ = Draft.objects.filter(pk=draft_id, is_reviewed=False).delete()
        if not deleted:
            raise _not_pending(draft_id)
    except DatabaseError as e:
        logger.error(f"Error deleting draft {draft_id}: {e}")
        raise PersistenceFailure(str(e)) from e

    logger.info(f"Draft {draft_id} rejected and deleted")


def copy_draft(draft_id) -> Draft:
    """Read-only: the draft with the text currently shown for its state."""
    try:
        return Draft.objects.get(pk=draft_id)
    except Draft.DoesNotExist:
        raise DraftNotFound(f"Draft {draft_id} does not exist.")
    except DatabaseError as e:
        raise PersistenceFailure(str(e)) from e
