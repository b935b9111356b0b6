"""Abstract base interface for channel adapters.

Adapters normalize provider-specific webhook payloads into `ChatEvent`s
and provide a uniform API for typing indicators and replies on that
channel. The reply sequence shared by every channel lives here.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ragbot.models.chat_event import ChatEvent

logger = logging.getLogger(__name__)

ERROR_MESSAGE = (
    "Sorry, I encountered an error. "
    "Please leave us a message and we'll get back to you soon, In Sha Allah!"
)


class ChannelAdapter(ABC):
    """Base adapter contract for all channels."""

    # Prefix for this adapter's log lines
    log_tag = "ADAPTER"
    error_message = ERROR_MESSAGE

    @abstractmethod
    def can_handle(self, raw: Dict[str, Any]) -> bool:
        """Quick predicate to check if this adapter can handle the payload."""
        raise NotImplementedError

    @abstractmethod
    def parse_incoming(self, raw: Dict[str, Any]) -> List[ChatEvent]:
        """Parse a channel-specific webhook payload into chat events.

        Returns an empty list for payloads that are not actionable
        (e.g., delivery receipts, echoes, attachments without text).
        """
        raise NotImplementedError

    @abstractmethod
    async def send_outgoing(self, user_id: str, message: str) -> bool:
        """Send a text reply back to the user via the channel.

        Args:
            user_id: Channel-specific user id (e.g., page-scoped sender id).
            message: Text content to send.

        Returns:
            True once every part was accepted by the channel.
        """
        raise NotImplementedError

    @abstractmethod
    async def send_typing(self, user_id: str, is_typing: bool) -> None:
        """Toggle the typing-presence signal for the user."""
        raise NotImplementedError

    async def handle_event(self, event: ChatEvent, responder) -> None:
        """Reply to one inbound message. Never raises.

        Sequence: typing on, generate reply, typing off, send. Any failure
        along the way is logged and answered with `error_message`.

        Args:
            event: Parsed inbound message.
            responder: Object with an async `respond(text) -> str`.
        """
        tag = self.log_tag
        logger.info(f"[{tag}] Received message from {event.sender_id}: {event.text}")
        try:
            await self.send_typing(event.sender_id, True)
            reply = await responder.respond(event.text)
            await self.send_typing(event.sender_id, False)
            await self.send_outgoing(event.sender_id, reply)
            logger.info(f"[{tag}] Sent response to {event.sender_id}: {reply}")
        except Exception:
            logger.exception(f"[{tag}] Error handling message from {event.sender_id}")
            try:
                await self.send_outgoing(event.sender_id, self.error_message)
            except Exception as e:
                logger.error(f"[{tag}] Failed to send error message to {event.sender_id}: {e}")

    async def handle_payload(self, raw: Dict[str, Any], responder) -> int:
        """Process every message of a webhook payload in order.

        Returns:
            Number of events handled.
        """
        events = self.parse_incoming(raw)
        for event in events:
            await self.handle_event(event, responder)
        return len(events)
