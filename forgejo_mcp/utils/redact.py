"""Utilities for redacting sensitive information from logs and errors."""

import re
from typing import Optional

REDACTED = "***REDACTED***"


def redact_token(text: str, secret: Optional[str] = None) -> str:
    """
    Redact forge access tokens from text.

    Args:
        text: Text that may contain credentials
        secret: The configured access token, removed verbatim wherever it appears

    Returns:
        Text with credentials replaced by a placeholder
    """
    if secret:
        text = text.replace(secret, REDACTED)

    # Authorization headers ("token <x>" is the Gitea/Forgejo scheme)
    text = re.sub(r'Authorization:\s*(token|Bearer)\s+[A-Za-z0-9_\-\.]+',
                  rf'Authorization: \1 {REDACTED}', text, flags=re.IGNORECASE)
    text = re.sub(r'Bearer\s+[A-Za-z0-9_\-\.]+', f'Bearer {REDACTED}', text)

    # Query string and assignment forms
    text = re.sub(r'(access_token|token)(["\']?\s*[:=]\s*["\']?)[A-Za-z0-9_\-\.]+',
                  rf'\1\2{REDACTED}', text, flags=re.IGNORECASE)

    return text


def safe_error_message(error: Exception, context: str = "", secret: Optional[str] = None) -> str:
    """
    Create a safe error message with redacted sensitive information.

    Args:
        error: The exception to format
        context: Additional context about where the error occurred
        secret: The configured access token, if known

    Returns:
        A safe error message with redacted tokens
    """
    error_msg = str(error) or type(error).__name__
    redacted_msg = redact_token(error_msg, secret)

    if context:
        return f"{context}: {redacted_msg}"
    return redacted_msg
