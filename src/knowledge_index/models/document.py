"""
Data models for documents and document sections.

These models represent the core data structures used throughout the index
for loading, linking, and retrieving markdown documents.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

CORE_METADATA_FIELDS = frozenset({"id", "name", "description", "dependencies", "parameters"})


class Collection(str, Enum):
    """The two independently loaded document sets."""

    KNOWLEDGE = "knowledge"
    TASKS = "tasks"


class ParsedMarkdown(BaseModel):
    """Result of parsing one markdown file: frontmatter metadata and trimmed body."""

    metadata: dict[str, Any] = Field(default_factory=dict, description="Parsed YAML frontmatter")
    content: str = Field(default="", description="Body with the frontmatter block removed, trimmed")
    has_frontmatter: bool = Field(default=False, description="Whether a frontmatter block was stripped")


class Section(BaseModel):
    """
    A heading-bounded, individually addressable span of a document body.

    Sections are derived on demand from a document's content and are never
    stored on the document itself.
    """

    uri: str = Field(..., min_length=1, description="Base URI plus fragment identifier")
    text: str = Field(..., description="Heading line and following body up to the next heading")
    heading_level: int | None = Field(None, ge=1, le=6, description="Heading level (H1=1, H2=2, etc.)")
    heading_title: str | None = Field(None, description="Raw heading title")
    content_type: str = Field(default="text/markdown", description="MIME type of the section text")
    start_position: int = Field(default=0, ge=0, description="Character start in the body")
    end_position: int = Field(default=0, ge=0, description="Character end (exclusive) in the body")

    @field_validator('end_position')
    @classmethod
    def validate_positions(cls, v, info):
        """Ensure end_position is not before start_position."""
        if info.data and 'start_position' in info.data and v < info.data['start_position']:
            raise ValueError("end_position must not be less than start_position")
        return v

    @computed_field
    @property
    def fragment(self) -> str:
        """Get the fragment part of the section URI."""
        return self.uri.rpartition('#')[2]

    def __str__(self) -> str:
        """String representation showing heading and content preview."""
        heading_info = f"[{self.heading_title}] " if self.heading_title else ""
        preview = self.text[:100] + "..." if len(self.text) > 100 else self.text
        return f"Section({heading_info}{preview})"

    model_config = ConfigDict(frozen=True)


class Document(BaseModel):
    """
    Represents a markdown document loaded from one collection.

    The ``metadata`` mapping keeps every frontmatter field verbatim; the core
    fields are exposed through typed properties and everything else through
    ``extra_metadata``. Dependency links are stored as keys into the owning
    collections and resolved by the engine on read.
    """

    key: str = Field(..., min_length=1, description="Collection-relative path without extension")
    file_path: str = Field(..., min_length=1, description="Absolute path to the source file")
    collection: Collection = Field(..., description="Collection the document was loaded into")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Frontmatter fields plus synthesized id")
    content: str = Field(default="", description="Body with frontmatter removed, trimmed")
    knowledge_deps: list[str] = Field(
        default_factory=list, description="Keys of knowledge documents this task depends on"
    )
    dependents: list[str] = Field(default_factory=list, description="Keys of tasks depending on this knowledge")

    @model_validator(mode='before')
    @classmethod
    def synchronize_id(cls, data):
        """The synthesized id always equals the key, whatever the frontmatter said."""
        if isinstance(data, dict) and isinstance(data.get('key'), str):
            metadata = dict(data.get('metadata') or {})
            metadata['id'] = data['key'].replace('\\', '/')
            data = {**data, 'metadata': metadata}
        return data

    @field_validator('file_path')
    @classmethod
    def validate_file_path(cls, v):
        """Ensure file path is absolute."""
        if not Path(v).is_absolute():
            raise ValueError("file_path must be an absolute path")
        return v

    @field_validator('key')
    @classmethod
    def validate_key(cls, v):
        """Keys always use forward slashes."""
        return v.replace('\\', '/')

    @computed_field
    @property
    def id(self) -> str:
        """Get the document identifier (always the key)."""
        return self.key

    @computed_field
    @property
    def name(self) -> str | None:
        """Get document name from frontmatter."""
        if (name := self.metadata.get('name')) is not None:
            return str(name)
        return None

    @computed_field
    @property
    def description(self) -> str:
        """Get document description from frontmatter, empty if absent."""
        if (description := self.metadata.get('description')) is not None:
            return str(description)
        return ""

    @computed_field
    @property
    def dependencies(self) -> list[str]:
        """Get declared dependency references; non-list values count as none."""
        dependencies = self.metadata.get('dependencies')
        if isinstance(dependencies, (list, tuple)):
            return [dep for dep in dependencies if isinstance(dep, str)]
        return []

    @computed_field
    @property
    def parameters(self) -> list[Any]:
        """Get declared parameter descriptors."""
        parameters = self.metadata.get('parameters')
        if isinstance(parameters, (list, tuple)):
            return list(parameters)
        return []

    @property
    def extra_metadata(self) -> dict[str, Any]:
        """Get passthrough frontmatter fields outside the core schema."""
        return {k: v for k, v in self.metadata.items() if k not in CORE_METADATA_FIELDS}

    @property
    def filename(self) -> str:
        """Get the filename without path."""
        return Path(self.file_path).name

    @property
    def topic(self) -> str:
        """Get the last key segment."""
        return self.key.rpartition('/')[2]

    @property
    def category(self) -> str | None:
        """Get the key prefix before the topic, if any."""
        category, _, _ = self.key.rpartition('/')
        return category or None

    def __str__(self) -> str:
        """String representation showing key and collection."""
        return f"Document({self.key}, {self.collection.value})"

    model_config = ConfigDict(validate_assignment=True)
