"""Shared decode/validate/call/report pipeline for tool handlers."""

import functools
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Type

from pydantic import BaseModel

from ..remote.interface import ClientInterface
from ..utils.errors import InvalidArgumentError, MCPError, RemoteError
from ..utils.redact import safe_error_message
from .inputs import decode_arguments
from .responses import ToolResponse, failure


logger = logging.getLogger(__name__)

Handler = Callable[[ClientInterface, Optional[Dict[str, Any]]], Awaitable[ToolResponse]]


def tool_handler(input_model: Type[BaseModel], operation: str) -> Callable[..., Handler]:
    """
    Wrap a coroutine ``(client, args) -> ToolResponse`` into a tool handler.

    The returned handler takes the raw MCP argument map. It decodes and
    validates it into ``input_model``; violations come back as an error
    response and the client is never called. Remote failures come back as
    ``Failed to <operation>: <cause>``. Nothing except cancellation escapes.

    Args:
        input_model: Pydantic model describing the tool arguments
        operation: Human-readable operation used in failure messages

    Returns:
        Decorator producing the handler
    """
    def decorator(func: Callable[[ClientInterface, Any], Awaitable[ToolResponse]]) -> Handler:
        @functools.wraps(func)
        async def handler(client: ClientInterface, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
            try:
                args = decode_arguments(input_model, arguments)
            except InvalidArgumentError as e:
                logger.info(f"{func.__name__}: rejected arguments: {e.message}")
                return failure(f"Invalid request: {e.message}")

            try:
                return await func(client, args)
            except RemoteError as e:
                logger.warning(f"{func.__name__}: {e.message}")
                return failure(f"Failed to {operation}: {e.cause}")
            except MCPError as e:
                logger.warning(f"{func.__name__}: {e.message}")
                return failure(f"Failed to {operation}: {e.message}")
            except Exception as e:
                logger.error(f"{func.__name__}: unexpected error", exc_info=True)
                return failure(f"Failed to {operation}: {safe_error_message(e)}")

        handler.operation = operation  # type: ignore[attr-defined]
        handler.input_model = input_model  # type: ignore[attr-defined]
        return handler

    return decorator
