"""Discord-compatible webhook delivery."""

import logging
from typing import Union

import requests

from seller_calendar.exceptions import NotificationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


def send_webhook(
    webhook_url: str, payload: dict, timeout: int = DEFAULT_TIMEOUT
) -> None:
    """
    POST a payload to a webhook.

    Raises:
        NotificationError: If the URL is empty, the request fails or the
            endpoint answers with a non-2xx status
    """
    if not webhook_url:
        raise NotificationError("Discord webhook URL is not configured.")

    try:
        response = requests.post(webhook_url, json=payload, timeout=timeout)
    except requests.RequestException as e:
        raise NotificationError(f"Failed to send to Discord: {e}") from e

    if not response.ok:
        logger.debug(f"Discord webhook error body: {response.text[:500]}")
        raise NotificationError(
            f"Failed to send to Discord: {response.status_code} {response.reason}"
        )


def notify(
    webhook_url: str, message: Union[dict, str], timeout: int = DEFAULT_TIMEOUT
) -> bool:
    """
    Fire-and-forget send. Never raises; failures are logged.

    Args:
        webhook_url: Discord webhook URL
        message: Full payload dict, or plain text sent as ``content``
        timeout: Request timeout in seconds

    Returns:
        True if the webhook accepted the message
    """
    payload = {"content": message} if isinstance(message, str) else message
    try:
        send_webhook(webhook_url, payload, timeout=timeout)
    except NotificationError as e:
        logger.error(str(e))
        return False
    return True
