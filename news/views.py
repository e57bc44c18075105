import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from draftdesk.exceptions import DraftDeskError, error_response
from .utils import sync_trending_news


logger = logging.getLogger(__name__)


@api_view(['GET'])
def collect_news_view(request):
    """
    Run one ingestion pass against the hot news feed.

    Returns the run counters with 200, including the "nothing to do" cases.
    Upstream rate limiting is passed through as 429 with retry_after.
    """

    try:
        report = sync_trending_news()
    except DraftDeskError as e:
        logger.error(f"News collection failed: {e.detail}")
        return error_response(e)

    return Response({
        'success': True,
        **report,
    }, status=status.HTTP_200_OK)
