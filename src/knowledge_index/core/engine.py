"""
Knowledge engine orchestrating loading, linking, search and retrieval.

The engine has one explicit initialization phase: both collections are read
from disk, cross-linked and indexed. Only after that phase completes does it
answer queries, and from then on every operation is a pure read over
immutable state, safe to call concurrently.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from knowledge_index.config.settings import IndexConfig, get_config
from knowledge_index.core.interfaces import IDependencyLinker, IDocumentStore, IKnowledgeEngine
from knowledge_index.linking.dependency_linker import DependencyLinker
from knowledge_index.models.document import Collection, Document, Section
from knowledge_index.models.exceptions import BaseError, InitializationError
from knowledge_index.models.link import LinkReport
from knowledge_index.models.query import (
    CatalogEntry,
    FetchResult,
    FetchStatus,
    KnowledgeResource,
    SearchResponse,
    TaskTemplateInfo,
)
from knowledge_index.parsers.section_splitter import SectionSplitter
from knowledge_index.search.search_index import HybridSearchIndex
from knowledge_index.storage.document_store import DocumentStore

logger = logging.getLogger(__name__)


class KnowledgeEngine(IKnowledgeEngine):
    """
    Entry point for transports and the CLI.

    Request-level failures (empty query, unknown id) are reported through the
    status of the returned model. Only lifecycle misuse, calling an operation
    before ``initialize``, raises.
    """

    def __init__(
        self,
        config: IndexConfig | None = None,
        store: IDocumentStore | None = None,
        linker: IDependencyLinker | None = None,
        splitter: SectionSplitter | None = None,
    ):
        """
        Initialize the engine with optional component overrides.

        Args:
            config: Index configuration (global configuration if None)
            store: Collection loader
            linker: Dependency linker
            splitter: Section splitter used for resource reads
        """
        self.config = config or get_config()
        self.store = store or DocumentStore(self.config)
        self.linker = linker or DependencyLinker(warn_on_unresolved=self.config.warn_on_unresolved_dependencies)
        self.splitter = splitter or SectionSplitter()

        self._context_root: Path | None = None
        self._knowledge: Mapping[str, Document] = MappingProxyType({})
        self._tasks: Mapping[str, Document] = MappingProxyType({})
        self._search_index: HybridSearchIndex | None = None
        self._link_report: LinkReport | None = None
        self._initialized = False

    @property
    def is_ready(self) -> bool:
        """Check if the initialization phase has completed."""
        return self._initialized

    @property
    def knowledge(self) -> Mapping[str, Document]:
        """Read-only view of the knowledge collection."""
        return self._knowledge

    @property
    def tasks(self) -> Mapping[str, Document]:
        """Read-only view of the task template collection."""
        return self._tasks

    async def initialize(self) -> None:
        """
        Load both collections, link them and build the search index.

        State is published only once every stage has succeeded; a failure
        leaves the engine unready.

        Raises:
            InitializationError: If any stage fails
        """
        if self._initialized:
            logger.debug("Knowledge engine already initialized")
            return

        stage = "context_resolution"
        try:
            root = self.config.resolve_context_path()
            logger.info("Initializing knowledge engine from %s", root)

            stage = "knowledge_loading"
            knowledge = await self.store.load_all(root / self.config.knowledge_dir, Collection.KNOWLEDGE)

            stage = "task_loading"
            tasks = await self.store.load_all(root / self.config.tasks_dir, Collection.TASKS)

            stage = "linking"
            link_report = self.linker.link(knowledge, tasks)

            stage = "search_indexing"
            search_index = HybridSearchIndex(self.config, tasks)

        except BaseError as e:
            logger.error("Knowledge engine initialization failed during %s: %s", stage, e)
            raise InitializationError(
                f"Failed to initialize knowledge engine: {e.message}",
                component="knowledge_engine",
                initialization_stage=stage,
                underlying_error=e,
            ) from e

        self._context_root = root
        self._knowledge = MappingProxyType(knowledge)
        self._tasks = MappingProxyType(tasks)
        self._link_report = link_report
        self._search_index = search_index
        self._initialized = True

        logger.info(
            "Knowledge engine ready: %d knowledge documents, %d task templates",
            len(knowledge),
            len(tasks),
        )

    def search(self, query: Any) -> SearchResponse:
        """
        Rank task templates against a free-text query.

        Args:
            query: Free-text query

        Returns:
            SearchResponse with OK, NO_MATCHES or INVALID_QUERY status
        """
        self._require_ready()
        return self._search_index.search(query)

    def get_document(self, document_id: Any, collection: Collection = Collection.TASKS) -> FetchResult:
        """
        Fetch one document by exact key.

        Args:
            document_id: Document key, e.g. ``tool/git``
            collection: Collection to look in

        Returns:
            FetchResult with copies of the document and its resolved links,
            or a NOT_FOUND / INVALID_ID status
        """
        self._require_ready()

        if not isinstance(document_id, str) or not document_id:
            return FetchResult(
                id=document_id,
                status=FetchStatus.INVALID_ID,
                message="Please provide a valid document ID.",
            )

        document = self._collection(collection).get(document_id)
        if document is None:
            logger.debug("Document %r not found in %s", document_id, collection.value)
            return FetchResult(
                id=document_id,
                status=FetchStatus.NOT_FOUND,
                message=f'Document with ID "{document_id}" not found.',
            )

        return FetchResult(
            id=document_id,
            status=FetchStatus.FOUND,
            document=document.model_copy(deep=True),
            knowledge_deps=self._resolve(document.knowledge_deps, self._knowledge),
            dependents=self._resolve(document.dependents, self._tasks),
        )

    def execute(self, task_id: Any) -> FetchResult:
        """
        Fetch a task template together with its knowledge dependencies.

        Args:
            task_id: Task template key

        Returns:
            FetchResult whose ``knowledge_deps`` lists the linked knowledge
            documents in declaration order
        """
        return self.get_document(task_id, Collection.TASKS)

    def list_catalog(self, collection: Collection = Collection.TASKS) -> list[CatalogEntry]:
        """List ``{id, description}`` for every document, sorted by id."""
        self._require_ready()
        return [
            CatalogEntry(id=document.id, description=document.description)
            for document in self._sorted(self._collection(collection))
        ]

    def list_task_templates(self) -> list[TaskTemplateInfo]:
        """List task templates with name, example and parameters, sorted by id."""
        self._require_ready()
        return [
            TaskTemplateInfo(
                id=document.id,
                name=document.name or document.id,
                description=document.description,
                example=document.metadata.get('example'),
                parameters=document.parameters,
            )
            for document in self._sorted(self._tasks)
        ]

    def list_knowledge_resources(self) -> list[KnowledgeResource]:
        """List knowledge documents as addressable resources, sorted by id."""
        self._require_ready()
        resources = []
        for document in self._sorted(self._knowledge):
            name = document.name or document.topic
            resources.append(
                KnowledgeResource(
                    uri=self.resource_uri(document.key),
                    name=name,
                    description=document.description or f"{name} knowledge resource",
                )
            )
        return resources

    def get_sections(
        self,
        document_id: str,
        collection: Collection = Collection.KNOWLEDGE,
        include_meta: bool = True,
    ) -> list[Section] | None:
        """
        Split a document into addressable sections.

        Args:
            document_id: Document key
            collection: Collection to look in
            include_meta: Prepend a ``#meta`` JSON section describing the document

        Returns:
            Sections under the ``<scheme>://<key>`` base URI, or None if the
            document does not exist
        """
        self._require_ready()

        if not isinstance(document_id, str):
            return None
        document = self._collection(collection).get(document_id)
        if document is None:
            return None

        base_uri = self.resource_uri(document.key)
        sections = self.splitter.split(document.content, base_uri)
        if not include_meta:
            return sections

        name = document.name or document.topic
        meta = {
            "name": name,
            "description": document.description or f"{document.topic} knowledge resource",
            "category": document.category,
            "topic": document.topic,
            **document.metadata,
        }
        meta_section = Section(
            uri=f"{base_uri}#meta",
            text=json.dumps(meta, indent=2, default=str),
            content_type="application/json",
        )
        return [meta_section, *sections]

    def resource_uri(self, key: str) -> str:
        """Build the resource URI of a document key."""
        return f"{self.config.knowledge_uri_scheme}://{key}"

    def get_status(self) -> dict[str, Any]:
        """
        Get current engine status and statistics.

        Returns:
            Dictionary with readiness, collection sizes and link statistics
        """
        status: dict[str, Any] = {
            "ready": self._initialized,
            "context_root": str(self._context_root) if self._context_root else None,
            "knowledge_documents": len(self._knowledge),
            "task_documents": len(self._tasks),
            "indexed_documents": self._search_index.size if self._search_index else 0,
        }
        if self._link_report is not None:
            status["links_created"] = self._link_report.links_created
            status["skipped_references"] = self._link_report.skipped_count
        return status

    def _require_ready(self) -> None:
        if not self._initialized:
            raise InitializationError(
                "Knowledge engine is not initialized; call initialize() first",
                component="knowledge_engine",
                initialization_stage="ready_check",
            )

    def _collection(self, collection: Collection) -> Mapping[str, Document]:
        if Collection(collection) == Collection.KNOWLEDGE:
            return self._knowledge
        return self._tasks

    @staticmethod
    def _sorted(documents: Mapping[str, Document]) -> list[Document]:
        return sorted(documents.values(), key=lambda document: document.id)

    @staticmethod
    def _resolve(keys: list[str], documents: Mapping[str, Document]) -> list[Document]:
        return [documents[key].model_copy(deep=True) for key in keys if key in documents]
