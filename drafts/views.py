import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.exceptions import APIException
from rest_framework.response import Response

from draftdesk.exceptions import DraftDeskError, ValidationFailure, error_response
from .generator import generate_draft
from .review import approve_draft, copy_draft, list_drafts, reject_draft, VIEW_PENDING
from .serializers import ApproveDraftSerializer, DraftSerializer


logger = logging.getLogger(__name__)


@api_view(['POST'])
def generate_draft_view(request):
    """
    Draft trigger webhook.

    Expects ``Authorization: Bearer <WEBHOOK_SECRET_KEY>`` and a JSON body
    ``{"record": {...news item...}}``. The secret is checked before the
    payload is looked at.
    """

    authorization = request.headers.get('Authorization')

    try:
        data = request.data
        record = data.get('record') if isinstance(data, dict) else None
    except APIException:
        record = None

    try:
        result = generate_draft(record, authorization)
    except DraftDeskError as e:
        return error_response(e)

    return Response({
        'message': 'AI Draft successfully generated and saved.',
        'draft_id': result.draft.id,
        'news_id': result.news_item.id,
        'insight': result.insight,
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
def list_drafts_view(request):
    view = request.GET.get('view', VIEW_PENDING)

    try:
        drafts = list_drafts(view)
    except DraftDeskError as e:
        return error_response(e)

    serializer = DraftSerializer(drafts, many=True)
    return Response({
        'view': view,
        'count': len(serializer.data),
        'data': serializer.data,
    })


@api_view(['POST'])
def approve_draft_view(request, draft_id):
    serializer = ApproveDraftSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response(ValidationFailure(serializer.errors))

    try:
        draft = approve_draft(draft_id, serializer.validated_data['text'])
    except DraftDeskError as e:
        logger.warning(f"Approve failed for draft {draft_id}: {e.detail}")
        return error_response(e)

    return Response({'success': True, 'data': DraftSerializer(draft).data})


@api_view(['POST'])
def reject_draft_view(request, draft_id):
    try:
        reject_draft(draft_id)
    except DraftDeskError as e:
        logger.warning(f"Reject failed for draft {draft_id}: {e.detail}")
        return error_response(e)

    return Response({'success': True, 'id': draft_id})


@api_view(['GET'])
def copy_draft_view(request, draft_id):
    try:
        draft = copy_draft(draft_id)
    except DraftDeskError as e:
        return error_response(e)

    return Response({
        'id': draft.id,
        'state': draft.state,
        'text': draft.display_text,
    })
