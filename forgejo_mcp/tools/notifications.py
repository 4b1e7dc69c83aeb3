"""Notification tool handlers."""

import logging

from ..remote.interface import ClientInterface
from .base import tool_handler
from .inputs import NotificationListInput
from .responses import ToolResponse, notification_list_text, success


logger = logging.getLogger(__name__)


@tool_handler(NotificationListInput, "list notifications")
async def handle_notification_list(client: ClientInterface, args: NotificationListInput) -> ToolResponse:
    logger.info(
        f"notification_list: repository={args.repository}, status={args.status}, "
        f"limit={args.limit}, offset={args.offset}"
    )
    notifications = await client.list_notifications(args.repository, args.status, args.limit, args.offset)
    return success(notification_list_text(notifications, args.status), notifications.to_dict())
