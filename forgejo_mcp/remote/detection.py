"""Detect whether a forge instance runs Gitea or Forgejo.

Both families expose ``/api/v1/version``; the returned version string is
classified by :func:`analyze_version_string`. Failing to retrieve the version
is an error, while an ambiguous version string falls back to Gitea.
"""

import logging
import re
from typing import Optional

import httpx

from ..config import (
    CLIENT_TYPE_FORGEJO,
    CLIENT_TYPE_GITEA,
    DETECTION_TIMEOUT,
    VERSION_ENDPOINT,
)
from ..utils.errors import DetectionError
from ..utils.redact import safe_error_message


logger = logging.getLogger(__name__)

# Checked in order against the lower-cased version string; Forgejo first so
# "12.0.1+gitea-1.22.0" is not mistaken for Gitea.
FORGEJO_INDICATORS = ("forgejo", "12.")
GITEA_INDICATORS = ("gitea", "1.")

FORGEJO_VERSION_PATTERN = re.compile(r"^12\.\d+\.\d+")
GITEA_VERSION_PATTERN = re.compile(r"^1\.\d+\.\d+")


def analyze_version_string(version: str) -> str:
    """
    Classify a version string as "gitea" or "forgejo".

    Args:
        version: Value of the "version" field returned by /api/v1/version

    Returns:
        "forgejo" or "gitea"; ambiguous and empty strings yield "gitea"
    """
    if not version:
        return CLIENT_TYPE_GITEA

    lowered = version.lower()

    for indicator in FORGEJO_INDICATORS:
        if indicator in lowered:
            return CLIENT_TYPE_FORGEJO

    for indicator in GITEA_INDICATORS:
        if indicator in lowered:
            return CLIENT_TYPE_GITEA

    if FORGEJO_VERSION_PATTERN.match(version):
        return CLIENT_TYPE_FORGEJO
    if GITEA_VERSION_PATTERN.match(version):
        return CLIENT_TYPE_GITEA

    return CLIENT_TYPE_GITEA


async def detect_remote_type(
    remote_url: str,
    auth_token: str = "",
    timeout: float = DETECTION_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> str:
    """
    Ask a forge instance for its version and classify it.

    Args:
        remote_url: Base URL of the forge instance
        auth_token: Optional access token sent as "Authorization: token ..."
        timeout: Request timeout in seconds
        transport: Optional httpx transport (used by tests)

    Returns:
        "forgejo" or "gitea"

    Raises:
        DetectionError: If the version endpoint cannot be reached, answers
            with a non-200 status, or returns something other than a JSON object
    """
    if not remote_url:
        raise DetectionError("remote URL cannot be empty")

    version_url = remote_url.rstrip("/") + VERSION_ENDPOINT
    headers = {"Accept": "application/json"}
    if auth_token:
        headers["Authorization"] = f"token {auth_token}"

    logger.info(f"Detecting remote type via {version_url}")

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(version_url, headers=headers)
    except (httpx.RequestError, httpx.InvalidURL) as e:
        raise DetectionError(
            safe_error_message(e, "failed to call version endpoint", auth_token),
            remote_url=remote_url
        )

    if response.status_code != 200:
        raise DetectionError(
            f"version endpoint returned status {response.status_code}",
            remote_url=remote_url,
            status_code=response.status_code
        )

    try:
        data = response.json()
    except ValueError as e:
        raise DetectionError(f"failed to parse version response: {e}", remote_url=remote_url)
    if not isinstance(data, dict):
        raise DetectionError("failed to parse version response: expected a JSON object", remote_url=remote_url)

    version = data.get("version") or ""
    remote_type = analyze_version_string(str(version))
    logger.info(f"Remote version '{version}' classified as {remote_type}")
    return remote_type
