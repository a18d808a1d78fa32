"""
Knowledge document index with hybrid keyword and similarity retrieval.

Loads a tree of markdown knowledge documents and task templates, links task
templates to the knowledge they declare as dependencies, and ranks task
templates against free-text queries.
"""

from knowledge_index.config import IndexConfig, get_config
from knowledge_index.core.engine import KnowledgeEngine
from knowledge_index.models import Collection, Document, FetchResult, FetchStatus, SearchResponse, SearchStatus, Section

__version__ = "0.1.0"

__all__ = [
    "IndexConfig",
    "get_config",
    "KnowledgeEngine",
    "Collection",
    "Document",
    "FetchResult",
    "FetchStatus",
    "SearchResponse",
    "SearchStatus",
    "Section",
    "__version__",
]
