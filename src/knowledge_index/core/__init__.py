"""Core contracts for the knowledge index components."""

from knowledge_index.core.interfaces import (
    IDependencyLinker,
    IDocumentParser,
    IDocumentStore,
    IKnowledgeEngine,
    ISearchIndex,
)

__all__ = [
    "IDependencyLinker",
    "IDocumentParser",
    "IDocumentStore",
    "IKnowledgeEngine",
    "ISearchIndex",
]
