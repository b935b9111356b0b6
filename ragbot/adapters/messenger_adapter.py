"""Facebook Messenger channel adapter.

Maps Messenger Platform webhook envelopes to `ChatEvent`s and sends
replies through the Graph API. The reply sequence itself (typing on,
generate reply, typing off, send) comes from `ChannelAdapter`.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from ragbot.adapters.base_channel_adapter import ChannelAdapter
from ragbot.clients import messenger_client
from ragbot.models.chat_event import ChatEvent
from ragbot.utils.message_splitter import needs_splitting, split_message

logger = logging.getLogger(__name__)

# Pause between parts of a split reply so they arrive in order
PART_DELAY_SECONDS = 0.5


class MessengerAdapter(ChannelAdapter):
    """Adapter for Facebook Page conversations on Messenger."""

    log_tag = "MESSENGER"

    def can_handle(self, raw: Dict[str, Any]) -> bool:
        return isinstance(raw, dict) and raw.get("object") == "page"

    def parse_incoming(self, raw: Dict[str, Any]) -> List[ChatEvent]:
        if not self.can_handle(raw):
            return []

        entries = raw.get("entry")
        if entries is None:
            return []
        if not isinstance(entries, list):
            logger.warning(f"[MESSENGER] Ignoring envelope with malformed entry: {type(entries).__name__}")
            return []

        events: List[ChatEvent] = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            messaging_events = entry.get("messaging")
            if messaging_events is None:
                continue
            if not isinstance(messaging_events, list):
                logger.warning(
                    f"[MESSENGER] Skipping entry with malformed messaging: {type(messaging_events).__name__}"
                )
                continue
            for messaging in messaging_events:
                event = self._parse_messaging_event(messaging)
                if event is not None:
                    events.append(event)
        return events

    def _parse_messaging_event(self, messaging: Any) -> Optional[ChatEvent]:
        if not isinstance(messaging, dict):
            return None

        sender = messaging.get("sender") or {}
        sender_id = sender.get("id") if isinstance(sender, dict) else None
        if not sender_id:
            return None

        message = messaging.get("message")
        if not isinstance(message, dict):
            # postbacks, deliveries, reads
            return None
        if message.get("is_echo"):
            return None

        text = message.get("text")
        if not isinstance(text, str) or not text:
            # Attachments and stickers arrive without text
            return None

        recipient = messaging.get("recipient") or {}
        recipient_id = recipient.get("id") if isinstance(recipient, dict) else None

        return ChatEvent(
            sender_id=str(sender_id),
            text=text,
            recipient_id=str(recipient_id) if recipient_id else None,
            message_id=message.get("mid"),
            timestamp=messaging.get("timestamp"),
        )

    async def send_typing(self, user_id: str, is_typing: bool) -> None:
        await messenger_client.send_typing_indicator(user_id, is_typing)

    async def send_outgoing(self, user_id: str, message: str) -> bool:
        """Send a reply, splitting it when it exceeds Messenger's text limit.

        Raises MessengerAPIError when the Graph API rejects a part.
        """
        if not needs_splitting(message):
            await messenger_client.send_text_message(user_id, message)
            return True

        parts = split_message(message)
        logger.warning(
            f"[MESSENGER] Message exceeds limit ({len(message)} chars), "
            f"splitting into {len(parts)} parts"
        )
        for idx, part in enumerate(parts, 1):
            logger.info(f"[MESSENGER] Sending part {idx}/{len(parts)} ({len(part)} chars)")
            await messenger_client.send_text_message(user_id, part)
            if idx < len(parts):
                await asyncio.sleep(PART_DELAY_SECONDS)
        return True
