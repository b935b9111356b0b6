"""Messenger Send API client.

Async client functions for the Facebook Graph API `me/messages` endpoint.
Follows the raise_for_status pattern with HTTPStatusError logging; unlike a
fire-and-forget send, failures are re-raised as MessengerAPIError so the
caller's reply sequence can fall back to an apology message.
"""
from __future__ import annotations

from typing import Any, Dict
import logging

import httpx

from ragbot import config

logger = logging.getLogger(__name__)


class MessengerAPIError(Exception):
    """Raised when the Graph API rejects or fails a send."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def _messages_url() -> str:
    base_url = (config.GRAPH_API_URL or "").rstrip("/")
    return f"{base_url}/{config.GRAPH_API_VERSION}/me/messages"


async def _post_messages(payload: Dict[str, Any], action: str, recipient_id: str) -> Dict[str, Any]:
    params = {"access_token": config.PAGE_ACCESS_TOKEN}
    async with httpx.AsyncClient() as client:
        try:
            response = await client.post(_messages_url(), params=params, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"[MESSENGER] Error sending {action} to {recipient_id}: {e.response.text}")
            raise MessengerAPIError(
                f"Graph API returned {e.response.status_code} for {action}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"[MESSENGER] Network error sending {action} to {recipient_id}: {e}")
            raise MessengerAPIError(f"Network error during {action}: {e}") from e


async def send_text_message(recipient_id: str, text: str) -> Dict[str, Any]:
    """Send a text message to a Messenger user."""
    payload: Dict[str, Any] = {
        "recipient": {"id": recipient_id},
        "message": {"text": text},
    }
    data = await _post_messages(payload, "text", recipient_id)
    logger.info(f"[MESSENGER] Text sent to {recipient_id}: {data}")
    return data


async def send_typing_indicator(recipient_id: str, is_typing: bool = True) -> Dict[str, Any]:
    """Toggle the typing indicator shown to a Messenger user."""
    sender_action = "typing_on" if is_typing else "typing_off"
    payload: Dict[str, Any] = {
        "recipient": {"id": recipient_id},
        "sender_action": sender_action,
    }
    data = await _post_messages(payload, sender_action, recipient_id)
    logger.debug(f"[MESSENGER] {sender_action} for {recipient_id}")
    return data
