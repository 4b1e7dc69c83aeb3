"""Configuration and constants for the Forgejo MCP server."""

import os
from typing import Mapping, Optional

from .utils.errors import ConfigError

SERVER_NAME = "forgejo_mcp"

# Forge API
API_PREFIX = "/api/v1"
VERSION_ENDPOINT = f"{API_PREFIX}/version"
DEFAULT_TIMEOUT = 30.0
DETECTION_TIMEOUT = 10.0

# Client types
CLIENT_TYPE_GITEA = "gitea"
CLIENT_TYPE_FORGEJO = "forgejo"
CLIENT_TYPE_AUTO = "auto"
CLIENT_TYPES = (CLIENT_TYPE_GITEA, CLIENT_TYPE_FORGEJO, CLIENT_TYPE_AUTO, "")

# Pagination
DEFAULT_LIMIT = 15
DEFAULT_OFFSET = 0

# Logging
DEFAULT_LOG_LEVEL = "INFO"

# Environment variables
ENV_REMOTE_URL = "FORGEJO_REMOTE_URL"
ENV_AUTH_TOKEN = "FORGEJO_AUTH_TOKEN"
ENV_CLIENT_TYPE = "FORGEJO_CLIENT_TYPE"
ENV_TIMEOUT = "FORGEJO_TIMEOUT"
ENV_LOG_LEVEL = "FORGEJO_LOG_LEVEL"
ENV_LOG_FILE = "FORGEJO_LOG_FILE"


class Config:
    """Settings the server needs to reach one forge instance."""

    def __init__(
        self,
        remote_url: str = "",
        auth_token: str = "",
        client_type: str = CLIENT_TYPE_AUTO,
        timeout: str = str(DEFAULT_TIMEOUT),
        log_level: str = DEFAULT_LOG_LEVEL,
        log_file: Optional[str] = None
    ):
        self.remote_url = remote_url.strip()
        self.auth_token = auth_token.strip()
        self.client_type = client_type.strip().lower()
        self.raw_timeout = timeout
        self.log_level = log_level
        self.log_file = log_file or None

    @property
    def timeout(self) -> float:
        """Per-request timeout in seconds."""
        return float(self.raw_timeout)

    def validate(self) -> None:
        """
        Check that the configuration can start a server.

        Raises:
            ConfigError: If a required setting is missing or malformed
        """
        if not self.remote_url:
            raise ConfigError(f"{ENV_REMOTE_URL} environment variable is required", ENV_REMOTE_URL)
        if not self.auth_token:
            raise ConfigError(f"{ENV_AUTH_TOKEN} environment variable is required", ENV_AUTH_TOKEN)
        if self.client_type not in CLIENT_TYPES:
            raise ConfigError(
                f"{ENV_CLIENT_TYPE} must be one of 'gitea', 'forgejo' or 'auto', got '{self.client_type}'",
                ENV_CLIENT_TYPE
            )
        try:
            timeout = self.timeout
        except ValueError:
            raise ConfigError(f"{ENV_TIMEOUT} must be a number of seconds", ENV_TIMEOUT)
        if timeout <= 0:
            raise ConfigError(f"{ENV_TIMEOUT} must be greater than 0", ENV_TIMEOUT)

    def to_dict(self) -> dict:
        """Non-secret view of the configuration, safe for logs."""
        return {
            "remote_url": self.remote_url,
            "auth_token": "set" if self.auth_token else "not set",
            "client_type": self.client_type or CLIENT_TYPE_AUTO,
            "timeout": self.raw_timeout,
            "log_level": self.log_level,
            "log_file": self.log_file
        }


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Read the configuration from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Unvalidated Config instance
    """
    env = os.environ if environ is None else environ
    return Config(
        remote_url=env.get(ENV_REMOTE_URL, ""),
        auth_token=env.get(ENV_AUTH_TOKEN, ""),
        client_type=env.get(ENV_CLIENT_TYPE, CLIENT_TYPE_AUTO),
        timeout=env.get(ENV_TIMEOUT, str(DEFAULT_TIMEOUT)),
        log_level=env.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
        log_file=env.get(ENV_LOG_FILE)
    )
