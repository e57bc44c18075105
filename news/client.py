import logging
from typing import Dict, List, Optional

import requests
from django.conf import settings

from draftdesk.exceptions import ConfigMissing, RateLimited, TransportError, UpstreamError


logger = logging.getLogger(__name__)


class CryptoPanicClient:
    """
    Thin client for the CryptoPanic posts feed.

    One call to ``fetch_hot_news`` issues exactly one bounded-time request
    and either returns the raw ``results`` list or raises a classified
    error. Retrying is left to the caller's scheduler.
    """

    def __init__(self, auth_token: str, url: str, timeout_ms: int = 10000,
                 user_agent: str = 'draftdesk/1.0', default_retry_after: int = 60,
                 session: Optional[requests.Session] = None):
        if not auth_token:
            raise ConfigMissing('CRYPTOPANIC_AUTH_TOKEN is not set.')

        self.auth_token = auth_token
        self.url = url
        self.timeout = timeout_ms / 1000
        self.user_agent = user_agent
        self.default_retry_after = default_retry_after
        self.session = session or requests.Session()

    def fetch_hot_news(self) -> List[Dict]:
        params = {
            "auth_token": self.auth_token,
            "kind": "news",
            "filter": "hot",
            "public": "true",
        }

        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

        try:
            response = self.session.get(self.url, params=params, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error(f"CryptoPanic request timed out after {self.timeout}s: {e}")
            raise TransportError(f"Request timed out after {self.timeout}s.") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"CryptoPanic request failed: {e}")
            raise TransportError(str(e)) from e

        if response.status_code == 429:
            retry_after = self._retry_after(response)
            logger.warning(f"CryptoPanic rate limit hit, retry after {retry_after}s")
            raise RateLimited('CryptoPanic rate limit reached.', retry_after=retry_after)

        if not 200 <= response.status_code < 300:
            logger.error(f"CryptoPanic returned HTTP {response.status_code}: {response.text[:200]}")
            raise UpstreamError(f"CryptoPanic returned HTTP {response.status_code}.")

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError('CryptoPanic response is not valid JSON.') from e

        results = body.get('results') if isinstance(body, dict) else None
        if not isinstance(results, list):
            raise UpstreamError('CryptoPanic response has no results array.')

        logger.info(f"Fetched {len(results)} candidates from CryptoPanic")
        return results

    def _retry_after(self, response) -> int:
        value = response.headers.get('Retry-After')
        try:
            return max(int(value), 0)
        except (TypeError, ValueError):
            return self.default_retry_after


def get_feed_client() -> CryptoPanicClient:
    return CryptoPanicClient(
        auth_token=settings.CRYPTOPANIC_AUTH_TOKEN,
        url=settings.CRYPTOPANIC_API_URL,
        timeout_ms=settings.FEED_TIMEOUT_MS,
        user_agent=settings.FEED_USER_AGENT,
        default_retry_after=settings.FEED_DEFAULT_RETRY_AFTER,
    )
