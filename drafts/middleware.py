import base64
import binascii
import hmac
import logging

from django.conf import settings
from django.http import HttpResponse


logger = logging.getLogger(__name__)


class DashboardBasicAuthMiddleware:
    """
    HTTP Basic auth gate in front of the review dashboard paths.

    Requests outside ``settings.DASHBOARD_PATH_PREFIXES`` pass through
    untouched. With no credentials configured every dashboard request is
    refused.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not request.path.startswith(tuple(settings.DASHBOARD_PATH_PREFIXES)):
            return self.get_response(request)

        if self.is_authorized(request.headers.get('Authorization')):
            return self.get_response(request)

        response = HttpResponse('Auth required', status=401)
        response['WWW-Authenticate'] = 'Basic realm="Secure Dashboard"'
        return response

    def is_authorized(self, header) -> bool:
        user = settings.DASHBOARD_USER
        password = settings.DASHBOARD_PASSWORD

        if not user or not password:
            logger.warning("Dashboard credentials are not configured, refusing request")
            return False

        if not header or not header.startswith('Basic '):
            return False

        try:
            decoded = base64.b64decode(header.split(' ', 1)[1], validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError):
            return False

        provided_user, _, provided_password = decoded.partition(':')
        user_ok = hmac.compare_digest(provided_user.encode(), user.encode())
        password_ok = hmac.compare_digest(provided_password.encode(), password.encode())
        return user_ok and password_ok
