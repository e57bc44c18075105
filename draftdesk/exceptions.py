from rest_framework import status
from rest_framework.response import Response


class DraftDeskError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = 'error'
    default_detail = 'Unexpected error.'

    def __init__(self, detail=None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def as_dict(self):
        return {
            'error': self.default_detail,
            'code': self.code,
            'details': self.detail,
        }


class ConfigMissing(DraftDeskError):
    code = 'config_missing'
    default_detail = 'Required configuration is missing.'


class UpstreamUnavailable(DraftDeskError):
    code = 'upstream_unavailable'
    default_detail = 'Upstream provider unavailable.'


class RateLimited(UpstreamUnavailable):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = 'rate_limited'
    default_detail = 'Upstream quota exceeded.'

    def __init__(self, detail=None, retry_after: int = 60):
        super().__init__(detail)
        self.retry_after = int(retry_after)

    def as_dict(self):
        payload = super().as_dict()
        payload['retry_after'] = self.retry_after
        return payload


class UpstreamError(UpstreamUnavailable):
    code = 'upstream_error'
    default_detail = 'Upstream provider returned an invalid response.'


class TransportError(UpstreamUnavailable):
    code = 'transport_error'
    default_detail = 'Upstream provider could not be reached.'


class Unauthorized(DraftDeskError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = 'unauthorized'
    default_detail = 'Unauthorized: Invalid or missing webhook secret.'


class ValidationFailure(DraftDeskError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = 'invalid_payload'
    default_detail = 'Bad Request: Invalid payload.'


class PersistenceConflict(DraftDeskError):
    status_code = status.HTTP_409_CONFLICT
    code = 'persistence_conflict'
    default_detail = 'Record already exists.'


class PersistenceFailure(DraftDeskError):
    code = 'persistence_failure'
    default_detail = 'Failed to save to the database.'


class GenerationContractViolation(DraftDeskError):
    code = 'generation_failed'
    default_detail = 'AI generation failed.'


class DraftNotFound(DraftDeskError):
    status_code = status.HTTP_404_NOT_FOUND
    code = 'draft_not_found'
    default_detail = 'Draft not found.'


class InvalidTransition(DraftDeskError):
    status_code = status.HTTP_409_CONFLICT
    code = 'invalid_transition'
    default_detail = 'Draft is no longer pending.'


def error_response(exc: DraftDeskError):
    headers = None
    if isinstance(exc, RateLimited):
        headers = {'Retry-After': str(exc.retry_after)}
    return Response(exc.as_dict(), status=exc.status_code, headers=headers)
