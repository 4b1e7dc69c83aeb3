"""Structured error handling utilities."""

import json
import logging
from typing import Any, Dict, List, Optional


# Configure module logger
logger = logging.getLogger(__name__)


class ErrorCode:
    """Standardized error codes for consistent error handling."""
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    DETECTION_ERROR = "DETECTION_ERROR"
    CLIENT_INIT_ERROR = "CLIENT_INIT_ERROR"
    REMOTE_ERROR = "REMOTE_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFIG_ERROR = "CONFIG_ERROR"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"


class MCPError(Exception):
    """Base exception for MCP server errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)
        logger.debug(f"MCPError ({code}): {message}", extra={"details": self.details})

    def to_dict(self) -> dict:
        """Convert error to standardized dictionary format."""
        return {
            "ok": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details
            }
        }

    def to_json(self) -> str:
        """Convert error to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


class InvalidArgumentError(MCPError):
    """Exception for input that fails one or more validation rules.

    ``violations`` holds one ``"field: reason"`` entry per offending field so
    a single response can report every problem at once.
    """
    def __init__(self, message: str, violations: Optional[List[str]] = None, field: Optional[str] = None):
        details: Dict[str, Any] = {}
        if field:
            details["field"] = field
        if violations:
            details["violations"] = list(violations)
        self.violations = list(violations or [])
        super().__init__(ErrorCode.INVALID_ARGUMENT, message, details)


class DetectionError(MCPError):
    """Exception raised when remote type auto-detection cannot complete."""
    def __init__(self, message: str, remote_url: Optional[str] = None, status_code: Optional[int] = None):
        details: Dict[str, Any] = {}
        if remote_url:
            details["remote_url"] = remote_url
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(ErrorCode.DETECTION_ERROR, message, details)


class ClientInitError(MCPError):
    """Exception raised when a forge client backend cannot be constructed."""
    def __init__(self, message: str, client_type: Optional[str] = None):
        details = {"client_type": client_type} if client_type else {}
        super().__init__(ErrorCode.CLIENT_INIT_ERROR, message, details)


class RemoteError(MCPError):
    """Exception for failed forge API calls.

    The message always starts with the failed operation, e.g.
    ``failed to create issue comment: <cause>``.
    """
    code = ErrorCode.REMOTE_ERROR

    def __init__(self, operation: str, cause: str, status_code: Optional[int] = None):
        self.operation = operation
        self.cause = cause
        self.status_code = status_code
        details: Dict[str, Any] = {"operation": operation}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(type(self).code, f"failed to {operation}: {cause}", details)


class NotFoundError(RemoteError):
    """Exception for forge API calls answered with 404."""
    code = ErrorCode.NOT_FOUND


class ConfigError(MCPError):
    """Exception for missing or invalid server configuration."""
    def __init__(self, message: str, setting: Optional[str] = None):
        details = {"setting": setting} if setting else {}
        super().__init__(ErrorCode.CONFIG_ERROR, message, details)


class UnknownToolError(MCPError):
    """Exception raised when dispatching a tool name that is not registered."""
    def __init__(self, name: str):
        super().__init__(ErrorCode.UNKNOWN_TOOL, f"unknown tool: {name}", {"tool": name})
