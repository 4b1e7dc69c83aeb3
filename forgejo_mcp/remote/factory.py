"""Build the forge client used for the lifetime of the server."""

import logging
from typing import Optional

import httpx

from ..config import (
    CLIENT_TYPE_AUTO,
    CLIENT_TYPE_FORGEJO,
    CLIENT_TYPE_GITEA,
    DEFAULT_TIMEOUT,
    DETECTION_TIMEOUT,
)
from ..utils.errors import InvalidArgumentError
from .detection import detect_remote_type
from .forgejo import ForgejoClient
from .gitea import GiteaClient
from .interface import ClientInterface


logger = logging.getLogger(__name__)

SUPPORTED_CLIENT_TYPES = (CLIENT_TYPE_GITEA, CLIENT_TYPE_FORGEJO, CLIENT_TYPE_AUTO, "")


async def create_client(
    remote_url: str,
    auth_token: str,
    client_type: str = CLIENT_TYPE_AUTO,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> ClientInterface:
    """
    Create the client backend for a forge instance.

    Args:
        remote_url: Base URL of the forge instance
        auth_token: Access token passed through to every request
        client_type: "gitea", "forgejo", or "auto"/"" to detect it
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport shared by detection and the client (used by tests)

    Returns:
        A GiteaClient or ForgejoClient

    Raises:
        InvalidArgumentError: If client_type is not supported (no network call is made)
        DetectionError: If auto-detection cannot reach or parse the version endpoint
        ClientInitError: If the backend cannot be constructed
    """
    requested = (client_type or "").strip().lower()
    if requested not in SUPPORTED_CLIENT_TYPES:
        raise InvalidArgumentError(
            f"unsupported client type: '{client_type}' (expected 'gitea', 'forgejo' or 'auto')",
            field="client_type"
        )

    resolved = requested
    if resolved in (CLIENT_TYPE_AUTO, ""):
        resolved = await detect_remote_type(
            remote_url,
            auth_token,
            timeout=min(timeout, DETECTION_TIMEOUT),
            transport=transport
        )
        logger.info(f"Auto-detected remote type: {resolved}")

    if resolved == CLIENT_TYPE_FORGEJO:
        client: ClientInterface = ForgejoClient(remote_url, auth_token, timeout=timeout, transport=transport)
    else:
        client = GiteaClient(remote_url, auth_token, timeout=timeout, transport=transport)

    logger.info(f"Using {resolved} client for {remote_url}")
    return client
