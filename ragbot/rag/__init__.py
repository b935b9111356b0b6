"""
RAG (Retrieval Augmented Generation) module for the ragbot system.

This package ranks a small in-memory knowledge base against the user's
message so the most relevant facts can be injected into the system
prompt before the completion call.

Components:
    - knowledge_base: Immutable store of business facts
    - embedder: Term-count embeddings over a fixed vocabulary
    - retriever: Cosine-similarity ranking and context formatting
"""
