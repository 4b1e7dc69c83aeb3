"""HTTP plumbing shared by the forge backends."""

import logging
import re
from typing import Any, Dict, Optional, Tuple

import httpx

from ..config import API_PREFIX, DEFAULT_TIMEOUT
from ..utils.errors import ClientInitError, NotFoundError, RemoteError
from ..utils.redact import safe_error_message


logger = logging.getLogger(__name__)

USER_AGENT = "forgejo-mcp"

# Neither forge has a draft flag on pull request creation
DRAFT_TITLE_PREFIX = "[DRAFT] "

# Notification status filter → the forge's "status-types" query values
NOTIFICATION_STATUS_TYPES = {
    "read": ["read"],
    "unread": ["unread"],
    "all": ["read", "unread"],
}

SUBJECT_NUMBER_PATTERN = re.compile(r"/(issues|pulls)/(\d+)")


def normalize_base_url(remote_url: str) -> str:
    """
    Check a forge URL and return it without a trailing slash.

    Raises:
        ClientInitError: If the URL is not an absolute http(s) URL
    """
    try:
        url = httpx.URL(remote_url.strip())
    except (httpx.InvalidURL, TypeError) as e:
        raise ClientInitError(f"invalid remote URL '{remote_url}': {e}")
    if url.scheme not in ("http", "https") or not url.host:
        raise ClientInitError(f"invalid remote URL '{remote_url}': expected an http(s) URL with a host")
    return str(url).rstrip("/")


def split_repository(repo: str) -> Tuple[str, str]:
    """Split 'owner/repo' into its two segments."""
    owner, _, name = repo.partition("/")
    return owner, name


def page_params(limit: int, offset: int) -> Dict[str, int]:
    """Translate a 0-based (limit, offset) window into 1-based page parameters."""
    return {"page": offset // limit + 1, "limit": limit}


def notification_params(status: str, limit: int, offset: int) -> Dict[str, Any]:
    """Query parameters for a repository notification listing."""
    return {
        "status-types": NOTIFICATION_STATUS_TYPES.get(status, NOTIFICATION_STATUS_TYPES["all"]),
        **page_params(limit, offset)
    }


def subject_number(url: Optional[str]) -> int:
    """Issue or pull request number from a notification subject URL, 0 if absent."""
    match = SUBJECT_NUMBER_PATTERN.search(url or "")
    return int(match.group(2)) if match else 0


class ForgeSession:
    """Issues authenticated JSON requests against a forge's /api/v1 tree.

    Every call opens its own connection, so one session can be shared by
    concurrent tool invocations.
    """

    def __init__(
        self,
        remote_url: str,
        auth_token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the session.

        Args:
            remote_url: Base URL of the forge instance
            auth_token: Access token sent as "Authorization: token ..."
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.remote_url = normalize_base_url(remote_url)
        self.api_url = f"{self.remote_url}{API_PREFIX}"
        self.timeout = timeout
        self._token = auth_token
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT
        }
        if self._token:
            headers["Authorization"] = f"token {self._token}"
        return headers

    def _describe_failure(self, response: httpx.Response) -> str:
        """Status line plus the forge's own error message when it sent one."""
        message = ""
        try:
            data = response.json()
            if isinstance(data, dict):
                message = str(data.get("message") or "")
        except ValueError:
            message = response.text[:200]
        status = f"{response.status_code} {response.reason_phrase}".strip()
        if message:
            return safe_error_message(Exception(message), status, self._token)
        return status

    async def request(
        self,
        method: str,
        path: str,
        operation: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Perform one API round trip and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path below /api/v1, e.g. "/repos/owner/repo/issues"
            operation: Human-readable operation used in error messages
            params: Query string parameters
            json: JSON request body

        Returns:
            Decoded JSON body, or None for empty responses

        Raises:
            NotFoundError: If the forge answers 404
            RemoteError: On network failures and any other non-2xx answer
        """
        url = f"{self.api_url}{path}"
        logger.debug(f"{method} {url} ({operation})")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=self._headers()
                )
        except httpx.TimeoutException as e:
            logger.error(f"Timeout during {operation}")
            raise RemoteError(operation, safe_error_message(e, "request timed out", self._token))
        except httpx.RequestError as e:
            logger.error(f"Network error during {operation}: {safe_error_message(e, secret=self._token)}")
            raise RemoteError(operation, safe_error_message(e, "network error", self._token))

        if response.status_code == 404:
            logger.warning(f"Not found during {operation}: {url}")
            raise NotFoundError(operation, self._describe_failure(response), status_code=404)

        if response.is_error:
            logger.error(f"HTTP {response.status_code} during {operation}")
            raise RemoteError(operation, self._describe_failure(response), status_code=response.status_code)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            raise RemoteError(operation, "forge returned a malformed JSON response",
                              status_code=response.status_code)
