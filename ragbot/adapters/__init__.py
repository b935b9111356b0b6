"""Adapters package entry.

Provides a factory to obtain adapters by channel string.
"""
from typing import Dict

from ragbot.adapters.base_channel_adapter import ChannelAdapter
from ragbot.adapters.messenger_adapter import MessengerAdapter


_ADAPTERS: Dict[str, ChannelAdapter] = {
    "messenger": MessengerAdapter(),
}


def get_adapter_for_channel(channel: str) -> ChannelAdapter:
    """Return a singleton adapter instance for the given channel."""
    adapter = _ADAPTERS.get(channel)
    if adapter is None:
        raise ValueError(f"No adapter for channel: {channel}")
    return adapter
