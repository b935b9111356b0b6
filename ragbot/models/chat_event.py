"""Chat event model for inbound Messenger messages.

This module defines the `ChatEvent` dataclass that the Messenger adapter
produces from webhook payloads and hands to the reply pipeline.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ChatEvent:
    """A single inbound text message.

    Attributes:
        sender_id: Page-scoped id of the user who sent the message; replies go here.
        text: Message text as received.
        recipient_id: Page id the message was addressed to, if present.
        message_id: Platform message id ('mid'), if present. Not used for dedup.
        timestamp: Platform timestamp in milliseconds, if present.
    """
    sender_id: str
    text: str
    recipient_id: Optional[str] = None
    message_id: Optional[str] = None
    timestamp: Optional[int] = None
