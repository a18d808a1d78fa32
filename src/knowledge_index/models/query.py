"""
Data models for search queries and retrieval results.

Every engine operation returns one of these models; failures that belong to
a single request (bad query, unknown id) are statuses, not exceptions.
"""

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from knowledge_index.models.document import Document


class MatchType(str, Enum):
    """Which ranking signal(s) contributed to a result."""

    KEYWORD = "keyword"
    SIMILARITY = "similarity"
    BOTH = "both"


class SearchStatus(str, Enum):
    """Outcome of a search request."""

    OK = "ok"
    NO_MATCHES = "no_matches"
    INVALID_QUERY = "invalid_query"


class FetchStatus(str, Enum):
    """Outcome of a lookup by id."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    INVALID_ID = "invalid_id"


def to_percentage(score: float) -> int:
    """Round a 0..1 score to an integer percentage, halves rounding up."""
    return int(math.floor(score * 100 + 0.5))


class RankedResult(BaseModel):
    """A single ranked search hit."""

    id: str = Field(..., min_length=1, description="Document key")
    description: str = Field(default="", description="Document description")
    score: float = Field(..., ge=0.0, le=1.0, description="Merged relevance (0.0-1.0)")
    match_type: MatchType = Field(..., description="Signal(s) that produced the score")

    @computed_field
    @property
    def relevance(self) -> int:
        """Get relevance as a rounded integer percentage."""
        return to_percentage(self.score)

    @computed_field
    @property
    def relevance_label(self) -> str:
        """Get relevance formatted as ``"<0-100>%"``."""
        return f"{self.relevance}%"

    def __str__(self) -> str:
        """String representation showing id, score and match type."""
        return f"Result({self.id}: {self.relevance_label}, {self.match_type.value})"


class SearchResponse(BaseModel):
    """
    Complete response to a search request.

    ``INVALID_QUERY`` and ``NO_MATCHES`` are distinct outcomes; both carry an
    empty result list and a human-readable message.
    """

    query: Any = Field(default=None, description="Query exactly as received")
    status: SearchStatus = Field(..., description="Outcome of the request")
    results: list[RankedResult] = Field(default_factory=list, description="Ranked results, best first")
    message: str | None = Field(None, description="User-facing note for non-OK outcomes")
    total_documents_searched: int = Field(default=0, ge=0, description="Documents in search scope")

    @computed_field
    @property
    def has_results(self) -> bool:
        """Check if response contains any results."""
        return len(self.results) > 0

    @computed_field
    @property
    def total_results(self) -> int:
        """Count of returned results."""
        return len(self.results)

    @model_validator(mode='after')
    def validate_status_matches_results(self):
        """Only OK responses may carry results, and they must carry some."""
        if (self.status == SearchStatus.OK) != bool(self.results):
            raise ValueError("status must be OK exactly when results are present")
        return self

    def __str__(self) -> str:
        """String representation showing status and result count."""
        return f"SearchResponse({self.status.value}, {len(self.results)} results)"


class CatalogEntry(BaseModel):
    """Projection of a document used by catalog listings."""

    id: str = Field(..., min_length=1, description="Document key")
    description: str = Field(default="", description="Document description")

    model_config = ConfigDict(frozen=True)


class TaskTemplateInfo(BaseModel):
    """Detailed catalog entry for a task template."""

    id: str = Field(..., min_length=1, description="Document key")
    name: str = Field(..., description="Declared name, or the id when absent")
    description: str = Field(default="", description="Document description")
    example: str = Field(default="", description="Example invocation from frontmatter")
    parameters: list[Any] = Field(default_factory=list, description="Declared parameter descriptors")

    @field_validator('example', mode='before')
    @classmethod
    def validate_example(cls, v):
        """Coerce non-string examples to text."""
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)


class KnowledgeResource(BaseModel):
    """Listing entry for one knowledge document exposed as a resource."""

    uri: str = Field(..., min_length=1, description="Resource URI")
    name: str = Field(..., min_length=1, description="Declared name or topic")
    description: str = Field(..., description="Declared description or a generated one")
    content_type: str = Field(default="text/markdown", description="MIME type of the resource")


class FetchResult(BaseModel):
    """
    Result of retrieving one document by id.

    For task templates ``knowledge_deps`` holds the resolved knowledge
    documents; for knowledge documents ``dependents`` holds the resolved task
    templates that declare a dependency on it.
    """

    id: Any = Field(default=None, description="Requested id exactly as received")
    status: FetchStatus = Field(..., description="Outcome of the lookup")
    document: Document | None = Field(None, description="The matching document")
    knowledge_deps: list[Document] = Field(default_factory=list, description="Resolved knowledge dependencies")
    dependents: list[Document] = Field(default_factory=list, description="Resolved dependent task templates")
    message: str | None = Field(None, description="User-facing note for non-FOUND outcomes")

    @computed_field
    @property
    def found(self) -> bool:
        """Check if the document was found."""
        return self.status == FetchStatus.FOUND

    @model_validator(mode='after')
    def validate_document_presence(self):
        """A document is present exactly when the lookup succeeded."""
        if self.found != (self.document is not None):
            raise ValueError("document must be set exactly when status is FOUND")
        return self

    def __str__(self) -> str:
        """String representation showing id and status."""
        return f"FetchResult({self.id!r}, {self.status.value}, {len(self.knowledge_deps)} deps)"
