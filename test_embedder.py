#!/usr/bin/env python3
"""
Tests for the term-count embedder
"""
from ragbot.rag.embedder import EMBEDDING_DIMENSIONS, VOCABULARY, embed, tokenize


def test_vocabulary_is_fixed():
    assert isinstance(VOCABULARY, tuple)
    assert EMBEDDING_DIMENSIONS == len(VOCABULARY) == 28
    assert VOCABULARY[:4] == ("nfc", "card", "price", "cost")
    assert VOCABULARY[-1] == "return"


def test_empty_text_is_all_zeros():
    assert embed("") == [0] * len(VOCABULARY)
    assert embed("   \n\t ") == [0] * len(VOCABULARY)


def test_no_overlap_is_all_zeros():
    assert embed("hello") == [0] * len(VOCABULARY)


def test_single_term_is_one_hot():
    vector = embed("price")
    expected = [0] * len(VOCABULARY)
    expected[VOCABULARY.index("price")] = 1
    assert vector == expected


def test_token_containing_term_counts():
    vector = embed("cards carding")
    assert vector[VOCABULARY.index("card")] == 2


def test_term_containing_token_counts():
    # "a" is a substring of "card", so the fuzzy match counts it
    vector = embed("a")
    assert vector[VOCABULARY.index("card")] == 1
    assert vector[VOCABULARY.index("nfc")] == 0


def test_case_and_whitespace_are_normalized():
    assert tokenize("  NFC\tCards\n now ") == ["nfc", "cards", "now"]
    assert embed("NFC CARD") == embed("nfc   card")


def test_punctuation_stays_attached():
    # "cost?" still contains "cost"
    vector = embed("How much does a card cost?")
    assert vector[VOCABULARY.index("card")] == 2
    assert vector[VOCABULARY.index("cost")] == 1


def test_embedding_is_deterministic_and_non_negative():
    text = "Custom NFC card designs delivered soon, In Sha Allah"
    first = embed(text)
    assert first == embed(text)
    assert len(first) == len(VOCABULARY)
    assert all(isinstance(c, int) and c >= 0 for c in first)
