"""
Retriever module for ranking knowledge base entries at query time.

Embeds the user message, scores every entry of the knowledge base by
cosine similarity, and returns the top-K entries plus a formatted context
block ready for injection into the system prompt.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from .embedder import embed
from .knowledge_base import DEFAULT_KNOWLEDGE_BASE, KnowledgeBase, KnowledgeEntry

logger = logging.getLogger(__name__)

# Number of entries injected into the prompt per query
DEFAULT_TOP_K = 3

CONTEXT_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class ScoredEntry:
    """A knowledge base entry annotated with its similarity to a query."""
    entry: KnowledgeEntry
    score: float

    @property
    def id(self) -> int:
        return self.entry.id

    @property
    def content(self) -> str:
        return self.entry.content

    @property
    def category(self) -> str:
        return self.entry.category

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.entry.id,
            "content": self.entry.content,
            "category": self.entry.category,
            "score": self.score,
        }


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity between two dense vectors.

    Vectors of different lengths, or with a zero norm, score 0.0.
    """
    if len(a) != len(b):
        return 0.0

    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


class Retriever:
    """Ranks the entries of a knowledge base against a query."""

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        embed_fn: Callable[[str], List[int]] = embed,
    ):
        self.knowledge_base = knowledge_base
        self.embed_fn = embed_fn

    def score_all(self, query: str) -> List[ScoredEntry]:
        """Score every entry against the query, in store order."""
        query_embedding = self.embed_fn(query)
        return [
            ScoredEntry(entry, cosine_similarity(query_embedding, self.embed_fn(entry.content)))
            for entry in self.knowledge_base
        ]

    def retrieve_top_k(self, query: str, k: int = DEFAULT_TOP_K) -> List[ScoredEntry]:
        """Return at most k entries ordered by descending score.

        `sorted` is stable, so entries with equal scores keep their store
        order.

        Args:
            query: The user message.
            k: Number of entries wanted. Values above the store size return
               the whole store; values below 1 return nothing.

        Returns:
            List of ScoredEntry, best first.
        """
        ranked = sorted(self.score_all(query), key=lambda s: s.score, reverse=True)
        results = ranked[:max(k, 0)]

        logger.info(
            f"[RETRIEVER] Top {len(results)} for query {query[:80]!r}: "
            + ", ".join(f"{r.id}/{r.category}={r.score:.3f}" for r in results)
        )
        return results


def format_context(results: Sequence[ScoredEntry]) -> str:
    """Join retrieved entry contents with a blank line between them."""
    return CONTEXT_SEPARATOR.join(r.content for r in results)


_default_retriever: Optional[Retriever] = None


def get_default_retriever() -> Retriever:
    """Return the process-wide retriever over the built-in knowledge base."""
    global _default_retriever
    if _default_retriever is None:
        _default_retriever = Retriever(DEFAULT_KNOWLEDGE_BASE)
    return _default_retriever


def retrieve_relevant_docs(query: str, top_k: int = DEFAULT_TOP_K) -> List[ScoredEntry]:
    """Convenience wrapper ranking the built-in knowledge base."""
    return get_default_retriever().retrieve_top_k(query, top_k)
