"""Channel detection for incoming webhooks.

Determines which adapter should handle a payload based on minimal markers.
"""
from typing import Any, Dict


def detect_channel(body: Dict[str, Any]) -> str:
    """Detect channel identifier from webhook body.

    Returns 'messenger' for Facebook Page subscriptions.
    Raises ValueError if the channel cannot be determined.
    """
    if isinstance(body, dict) and body.get("object") == "page":
        return "messenger"

    raise ValueError("Unknown channel for payload")
