"""
Static business knowledge base for retrieval.

Holds the fixed set of short facts about the NFC card shop. The set is
built once at import time and never mutated; retrievers receive a
`KnowledgeBase` instance so tests can substitute their own entries.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple


@dataclass(frozen=True)
class KnowledgeEntry:
    """A single fact in the knowledge base.

    Attributes:
        id: Stable unique identifier.
        content: Fact text, injected verbatim into the prompt context.
        category: Topic label (e.g. 'pricing', 'delivery').
    """
    id: int
    content: str
    category: str


class KnowledgeBase:
    """Immutable, ordered collection of `KnowledgeEntry` records.

    Order matters: ranking ties are broken by position in the store.
    """

    def __init__(self, entries: Iterable[KnowledgeEntry]):
        self._entries: Tuple[KnowledgeEntry, ...] = tuple(entries)
        ids = [e.id for e in self._entries]
        if len(ids) != len(set(ids)):
            raise ValueError("Knowledge base entry ids must be unique")

    def __iter__(self) -> Iterator[KnowledgeEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, entry_id: int) -> Optional[KnowledgeEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None


BUSINESS_DATA: Tuple[KnowledgeEntry, ...] = (
    KnowledgeEntry(
        1,
        "We specialize in selling premium NFC cards that allow you to share your digital information "
        "instantly with just a tap. We offer over 800+ unique designs to match your style and personality.",
        "about",
    ),
    KnowledgeEntry(
        2,
        "We are currently not taking orders at the moment, but we will be back soon, In Sha Allah! "
        "Please check back later or leave us a message and we'll notify you when we resume operations.",
        "status",
    ),
    KnowledgeEntry(
        3,
        "Our standard NFC cards are priced at 500 Taka. Custom orders are available and pricing may vary "
        "based on your specific customization requirements.",
        "pricing",
    ),
    KnowledgeEntry(
        4,
        "We offer fast delivery within 2-3 days of order confirmation. Once we resume operations, "
        "we'll ensure your NFC cards reach you quickly.",
        "delivery",
    ),
    KnowledgeEntry(
        5,
        "We specialize in custom NFC card orders! You can customize the design, and we can even input "
        "your personal portfolio, contact information, social media links, or business details "
        "directly into the card.",
        "customization",
    ),
    KnowledgeEntry(
        6,
        "We have an extensive collection of over 800+ designs to choose from! Whether you want something "
        "professional, creative, minimalist, or bold, we have a design that matches your personality.",
        "designs",
    ),
    KnowledgeEntry(
        7,
        "Our NFC cards can store your personal portfolio, business card information, social media "
        "profiles, website links, contact details, and more. Just tap your card on any smartphone to "
        "instantly share your information!",
        "features",
    ),
    KnowledgeEntry(
        8,
        "Custom orders may have different pricing depending on the level of customization - such as "
        "special designs, premium materials, or complex information programming. Contact us for a "
        "personalized quote!",
        "custom-pricing",
    ),
    KnowledgeEntry(
        9,
        "NFC cards are the modern way to network! Instead of traditional paper business cards, simply "
        "tap your NFC card on someone's phone and all your information transfers instantly. It's "
        "eco-friendly, professional, and unforgettable.",
        "benefits",
    ),
    KnowledgeEntry(
        10,
        "Although we're temporarily not accepting orders, feel free to browse our designs and plan your "
        "custom NFC card. We'll be back soon, In Sha Allah, and we can't wait to serve you!",
        "status",
    ),
    KnowledgeEntry(
        11,
        "You can reach us for inquiries even while we're not operating. Leave us a message and we'll get "
        "back to you as soon as we resume operations, In Sha Allah.",
        "contact",
    ),
    KnowledgeEntry(
        12,
        "Our NFC cards work with all modern smartphones - both Android and iPhone. No app installation "
        "required! Just tap and share your information instantly.",
        "compatibility",
    ),
)

# Default store used by the running bot
DEFAULT_KNOWLEDGE_BASE = KnowledgeBase(BUSINESS_DATA)
