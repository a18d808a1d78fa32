"""
Abstract interfaces for the knowledge index.

These interfaces define the contracts for core components, enabling
dependency injection for testing and alternative implementations.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from knowledge_index.models import (
    CatalogEntry,
    Collection,
    Document,
    FetchResult,
    LinkReport,
    ParsedMarkdown,
    SearchResponse,
    Section,
)


class IDocumentParser(ABC):
    """Interface for parsing markdown files."""

    @abstractmethod
    async def parse_file(self, file_path: Path) -> ParsedMarkdown:
        """
        Parse a file into frontmatter metadata and body content.

        Args:
            file_path: Path to the file to parse

        Returns:
            ParsedMarkdown with metadata and trimmed content

        Raises:
            DocumentParsingError: If the file cannot be read
        """
        pass


class IDocumentStore(ABC):
    """Interface for loading a collection directory into memory."""

    @abstractmethod
    async def load_all(self, root_dir: Path, collection: Collection) -> dict[str, Document]:
        """
        Load every markdown file under a directory.

        Args:
            root_dir: Collection root directory
            collection: Collection the documents belong to

        Returns:
            Mapping of document key to Document

        Raises:
            DocumentLoadError: If the collection cannot be loaded
        """
        pass


class IDependencyLinker(ABC):
    """Interface for cross-linking task templates to knowledge documents."""

    @abstractmethod
    def link(self, knowledge: dict[str, Document], tasks: dict[str, Document]) -> LinkReport:
        """
        Populate dependency links on both collections.

        Args:
            knowledge: Knowledge collection
            tasks: Task template collection

        Returns:
            Summary of the links created and references skipped
        """
        pass


class ISearchIndex(ABC):
    """Interface for ranking documents against a free-text query."""

    @abstractmethod
    def search(self, query: Any) -> SearchResponse:
        """
        Rank documents against a query.

        Args:
            query: Free-text query; anything but a non-empty string is rejected

        Returns:
            SearchResponse with OK, NO_MATCHES or INVALID_QUERY status
        """
        pass

    @property
    @abstractmethod
    def size(self) -> int:
        """Get the number of indexed documents."""
        pass


class IKnowledgeEngine(ABC):
    """
    Main interface for the knowledge engine, orchestrating all components.

    This is the interface that external layers (CLI, RPC transports) use.
    After ``initialize`` completes, every operation is a pure read.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """
        Load both collections, link them and build the search index.

        Raises:
            InitializationError: If any stage fails
        """
        pass

    @abstractmethod
    def search(self, query: Any) -> SearchResponse:
        """Rank task templates against a free-text query."""
        pass

    @abstractmethod
    def get_document(self, document_id: Any, collection: Collection = Collection.TASKS) -> FetchResult:
        """Fetch one document by key."""
        pass

    @abstractmethod
    def execute(self, task_id: Any) -> FetchResult:
        """Fetch a task template together with its knowledge dependencies."""
        pass

    @abstractmethod
    def list_catalog(self, collection: Collection = Collection.TASKS) -> list[CatalogEntry]:
        """List every document of a collection sorted by id."""
        pass

    @abstractmethod
    def get_sections(self, document_id: str, collection: Collection = Collection.KNOWLEDGE) -> list[Section] | None:
        """Split a document into addressable sections."""
        pass

    @abstractmethod
    def get_status(self) -> dict[str, Any]:
        """
        Get current engine status and statistics.

        Returns:
            Dictionary with status information
        """
        pass
