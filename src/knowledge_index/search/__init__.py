"""Hybrid keyword and similarity search."""

from knowledge_index.search.search_index import HybridSearchIndex
from knowledge_index.search.similarity import compare_two_strings, rate_all

__all__ = ["HybridSearchIndex", "compare_two_strings", "rate_all"]
