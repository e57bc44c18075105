import logging

from celery import shared_task

from draftdesk.exceptions import DraftDeskError, RateLimited
from draftdesk.health import send_health_check_message
from .utils import sync_trending_news


logger = logging.getLogger(__name__)


@shared_task
def collect_trending_news():

    try:
        return sync_trending_news()
    except RateLimited as e:
        # Next beat run is the retry
        logger.warning(f"News collection rate limited, retry after {e.retry_after}s")
        return e.as_dict()
    except DraftDeskError as e:
        logger.error(f"News collection task failed: {e.detail}")
        send_health_check_message("ERROR: News collection encountered an error. " + str(e.as_dict()))
        return e.as_dict()
