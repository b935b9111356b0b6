"""
Message splitting utility for Messenger's 2000-character text limit
"""
from typing import List

MESSENGER_MAX_LENGTH = 2000

# Preferred break points, best first, with the minimum fraction of the
# window a break must reach to be used.
_BREAKS = (
    (("\n\n",), 0.5),
    (("\n",), 0.5),
    ((". ", "! ", "? "), 0.5),
    ((", ", "; "), 0.5),
    ((" ",), 0.7),
)


def _find_split_point(window: str, max_length: int) -> int:
    for separators, min_fraction in _BREAKS:
        positions = [(window.rfind(sep), sep) for sep in separators]
        pos, sep = max(positions)
        if pos > max_length * min_fraction:
            return pos + len(sep)
    return max_length


def split_message(message: str, max_length: int = MESSENGER_MAX_LENGTH) -> List[str]:
    """
    Split a long reply into parts that fit Messenger's text limit.

    Splits at the latest natural boundary (paragraph, line, sentence,
    clause, word) found in the second half of each window, otherwise cuts
    at max_length.

    Args:
        message: The message to split
        max_length: Maximum length per part

    Returns:
        List of non-empty parts in order
    """
    if len(message) <= max_length:
        return [message]

    parts = []
    remaining = message
    while len(remaining) > max_length:
        split_point = _find_split_point(remaining[:max_length], max_length)
        part = remaining[:split_point].strip()
        if part:
            parts.append(part)
        remaining = remaining[split_point:].strip()

    if remaining:
        parts.append(remaining)
    return parts


def needs_splitting(message: str, max_length: int = MESSENGER_MAX_LENGTH) -> bool:
    """Check if a message exceeds the channel limit"""
    return len(message) > max_length
