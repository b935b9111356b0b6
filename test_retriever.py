#!/usr/bin/env python3
"""
Tests for cosine similarity ranking over the knowledge base
"""
import math
from typing import Optional, get_type_hints

import pytest

from ragbot.rag.knowledge_base import BUSINESS_DATA, DEFAULT_KNOWLEDGE_BASE, KnowledgeBase, KnowledgeEntry
from ragbot.rag.retriever import (
    Retriever,
    ScoredEntry,
    cosine_similarity,
    format_context,
    retrieve_relevant_docs,
)


# ----------------------------- similarity -----------------------------
@pytest.mark.parametrize("vector", [[1, 0, 0], [3, 4], [0, 2, 5, 1], [7]])
def test_self_similarity_is_one(vector):
    assert math.isclose(cosine_similarity(vector, vector), 1.0)


@pytest.mark.parametrize("a,b", [([1, 2, 3], [3, 2, 1]), ([0, 1], [1, 1]), ([5, 0, 2], [1, 1, 1])])
def test_similarity_is_symmetric(a, b):
    assert cosine_similarity(a, b) == cosine_similarity(b, a)


def test_zero_vector_scores_zero():
    assert cosine_similarity([0, 0, 0], [1, 2, 3]) == 0
    assert cosine_similarity([1, 2, 3], [0, 0, 0]) == 0
    assert cosine_similarity([0, 0], [0, 0]) == 0


def test_length_mismatch_scores_zero():
    assert cosine_similarity([1, 2], [1, 2, 3]) == 0


def test_orthogonal_vectors_score_zero():
    assert cosine_similarity([1, 0], [0, 1]) == 0


def test_known_value():
    assert math.isclose(cosine_similarity([1, 1], [1, 0]), 1 / math.sqrt(2))


# ----------------------------- knowledge base --------------------------
def test_reference_knowledge_base():
    assert len(DEFAULT_KNOWLEDGE_BASE) == 12
    assert [e.id for e in DEFAULT_KNOWLEDGE_BASE] == list(range(1, 13))
    assert DEFAULT_KNOWLEDGE_BASE.get(3).category == "pricing"
    assert DEFAULT_KNOWLEDGE_BASE.get(8).category == "custom-pricing"
    assert DEFAULT_KNOWLEDGE_BASE.get(99) is None


def test_lookup_declares_optional_entry():
    assert get_type_hints(KnowledgeBase.get)["return"] == Optional[KnowledgeEntry]


def test_knowledge_base_rejects_duplicate_ids():
    with pytest.raises(ValueError):
        KnowledgeBase([KnowledgeEntry(1, "a", "x"), KnowledgeEntry(1, "b", "y")])


def test_entries_are_immutable():
    entry = BUSINESS_DATA[0]
    with pytest.raises(Exception):
        entry.content = "changed"


# ----------------------------- ranking ---------------------------------
def test_price_query_ranks_pricing_first():
    results = retrieve_relevant_docs("price", 3)
    assert results[0].id == 3
    assert results[0].category == "pricing"
    assert results[0].score > 0
    # Nothing else mentions "price"
    assert all(r.score == 0 for r in results[1:])


def test_delivery_query_ranks_delivery_first():
    results = retrieve_relevant_docs("delivery")
    assert results[0].id == 4


def test_custom_pricing_query_ranks_both_pricing_entries():
    results = retrieve_relevant_docs("what is the price for custom orders", 3)
    assert [r.id for r in results] == [3, 8, 10]


def test_short_tokens_influence_ranking():
    # "a" overlaps many vocabulary terms, pulling general entries up
    results = retrieve_relevant_docs("How much does a card cost?", 3)
    assert [r.id for r in results] == [1, 2, 6]


def test_results_sorted_and_bounded():
    for k in (1, 3, 5, 12):
        results = retrieve_relevant_docs("custom nfc card designs", k)
        assert len(results) == k
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)


def test_k_larger_than_store_is_clamped():
    results = retrieve_relevant_docs("nfc", 50)
    assert len(results) == len(DEFAULT_KNOWLEDGE_BASE)


def test_non_positive_k_returns_nothing():
    assert retrieve_relevant_docs("nfc", 0) == []
    assert retrieve_relevant_docs("nfc", -1) == []


def test_zero_scores_keep_store_order():
    results = retrieve_relevant_docs("hello", 12)
    assert [r.id for r in results] == list(range(1, 13))
    assert all(r.score == 0 for r in results)


def test_equal_scores_keep_store_order():
    kb = KnowledgeBase([
        KnowledgeEntry(10, "unrelated words only", "other"),
        KnowledgeEntry(20, "nfc card", "second"),
        KnowledgeEntry(30, "nfc card", "third"),
    ])
    results = Retriever(kb).retrieve_top_k("nfc card", 3)
    assert [r.id for r in results] == [20, 30, 10]
    assert results[0].score == results[1].score


def test_injected_knowledge_base_and_embedder():
    kb = KnowledgeBase([KnowledgeEntry(1, "x", "a"), KnowledgeEntry(2, "y", "b")])
    fake_embed = {"q": [1, 0], "x": [0, 1], "y": [1, 0]}.get
    results = Retriever(kb, embed_fn=fake_embed).retrieve_top_k("q", 1)
    assert [r.id for r in results] == [2]
    assert math.isclose(results[0].score, 1.0)


def test_store_smaller_than_k():
    kb = KnowledgeBase([KnowledgeEntry(1, "nfc", "only")])
    assert len(Retriever(kb).retrieve_top_k("nfc", 3)) == 1
    assert Retriever(KnowledgeBase([])).retrieve_top_k("nfc", 3) == []


# ----------------------------- formatting ------------------------------
def test_format_context_joins_with_blank_line():
    entries = [ScoredEntry(BUSINESS_DATA[0], 0.5), ScoredEntry(BUSINESS_DATA[2], 0.4)]
    assert format_context(entries) == BUSINESS_DATA[0].content + "\n\n" + BUSINESS_DATA[2].content


def test_scored_entry_to_dict():
    scored = ScoredEntry(BUSINESS_DATA[2], 0.25)
    assert scored.to_dict() == {
        "id": 3,
        "content": BUSINESS_DATA[2].content,
        "category": "pricing",
        "score": 0.25,
    }
