"""
Embedder module for turning text into term-count vectors.

Each component counts the whitespace tokens of the text that overlap a
fixed vocabulary term by substring containment in either direction
("cards" and "carding" both count toward "card"). The match is fuzzy on
purpose and short tokens such as "a" overlap several terms.
"""

from typing import List, Tuple


# Order is part of the vector layout; vectors built from a different
# vocabulary or ordering are not comparable.
VOCABULARY: Tuple[str, ...] = (
    "nfc", "card", "price", "cost", "taka", "delivery", "custom", "design",
    "order", "buy", "purchase", "portfolio", "contact", "business", "tap",
    "phone", "smartphone", "information", "share", "digital", "modern",
    "customization", "designs", "available", "sha", "allah", "soon", "return",
)

EMBEDDING_DIMENSIONS = len(VOCABULARY)


def tokenize(text: str) -> List[str]:
    """Lower-case the text and split it on runs of whitespace."""
    return text.lower().split()


def embed(text: str) -> List[int]:
    """Generate the term-count embedding for a text.

    Args:
        text: Any string, including the empty string.

    Returns:
        List of non-negative ints, one per vocabulary term, in
        vocabulary order. All zeros when nothing overlaps.
    """
    words = tokenize(text)
    return [
        sum(1 for w in words if term in w or w in term)
        for term in VOCABULARY
    ]
