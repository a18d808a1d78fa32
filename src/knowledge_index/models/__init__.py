"""Data models and schemas for the knowledge index."""

from knowledge_index.models.document import Collection, Document, ParsedMarkdown, Section
from knowledge_index.models.exceptions import (
    BaseError,
    ConfigurationError,
    DocumentLoadError,
    DocumentParsingError,
    FrontmatterError,
    InitializationError,
    LinkingError,
)
from knowledge_index.models.link import LinkReport, SkippedReference, SkipReason
from knowledge_index.models.query import (
    CatalogEntry,
    FetchResult,
    FetchStatus,
    KnowledgeResource,
    MatchType,
    RankedResult,
    SearchResponse,
    SearchStatus,
    TaskTemplateInfo,
)

__all__ = [
    "Collection",
    "Document",
    "ParsedMarkdown",
    "Section",
    "CatalogEntry",
    "FetchResult",
    "FetchStatus",
    "KnowledgeResource",
    "MatchType",
    "RankedResult",
    "SearchResponse",
    "SearchStatus",
    "TaskTemplateInfo",
    "LinkReport",
    "SkippedReference",
    "SkipReason",
    "BaseError",
    "ConfigurationError",
    "DocumentLoadError",
    "DocumentParsingError",
    "FrontmatterError",
    "InitializationError",
    "LinkingError",
]
