"""
In-memory document store.

Discovers markdown files under a collection root, parses them concurrently,
and builds a mapping keyed by the collection-relative, extension-stripped
path of each file.
"""

import asyncio
import logging
import os
from pathlib import Path

from knowledge_index.config.settings import IndexConfig
from knowledge_index.core.interfaces import IDocumentParser, IDocumentStore
from knowledge_index.models.document import Collection, Document, ParsedMarkdown
from knowledge_index.models.exceptions import DocumentLoadError, DocumentParsingError
from knowledge_index.parsers.markdown_parser import MarkdownParser

logger = logging.getLogger(__name__)


class DocumentStore(IDocumentStore):
    """
    Loads one collection directory into a key-to-document mapping.

    A file that cannot be read aborts the whole collection load unless
    ``skip_unreadable_files`` is enabled. A file named exactly ``.md`` has no
    key and is skipped.
    """

    def __init__(self, config: IndexConfig, parser: IDocumentParser | None = None):
        """Initialize the store with configuration and an optional parser."""
        self.config = config
        self.parser = parser or MarkdownParser()

    async def load_all(self, root_dir: Path, collection: Collection) -> dict[str, Document]:
        """
        Load every markdown file under ``root_dir``.

        Args:
            root_dir: Collection root directory
            collection: Collection the documents belong to

        Returns:
            Mapping of document key to Document, in discovery order

        Raises:
            DocumentLoadError: If the root is missing, the walk fails, or a
                file cannot be read while ``skip_unreadable_files`` is off
        """
        root = Path(root_dir).resolve()
        if not root.is_dir():
            raise DocumentLoadError(f"Collection directory does not exist: {root}", root_dir=str(root))

        try:
            files = self.discover_files(root)
        except OSError as e:
            raise DocumentLoadError(
                f"Failed to scan collection directory {root}: {e}", root_dir=str(root), underlying_error=e
            ) from e

        logger.debug("Discovered %d markdown files under %s", len(files), root)

        semaphore = asyncio.Semaphore(self.config.max_concurrent_reads)

        async def parse(path: Path) -> ParsedMarkdown:
            async with semaphore:
                return await self.parser.parse_file(path)

        results = await asyncio.gather(*(parse(path) for path in files), return_exceptions=True)

        documents: dict[str, Document] = {}
        for path, result in zip(files, results, strict=True):
            if isinstance(result, DocumentParsingError):
                if self.config.skip_unreadable_files:
                    logger.error("Skipping unreadable file %s: %s", path, result)
                    continue
                raise DocumentLoadError(
                    f"Failed to load {collection.value} collection: {result.message}",
                    root_dir=str(root),
                    file_path=str(path),
                    documents_loaded=len(documents),
                    underlying_error=result,
                ) from result
            if isinstance(result, Exception):
                raise DocumentLoadError(
                    f"Unexpected error loading {path}: {result}",
                    root_dir=str(root),
                    file_path=str(path),
                    documents_loaded=len(documents),
                    underlying_error=result,
                ) from result
            if isinstance(result, BaseException):
                raise result

            key = self.make_key(root, path)
            if not key.rpartition("/")[2]:
                logger.warning("Skipping %s: file name has no stem to use as a document key", path)
                continue

            documents[key] = Document(
                key=key,
                file_path=str(path),
                collection=collection,
                metadata=result.metadata,
                content=result.content,
            )

        logger.info("Loaded %d %s documents from %s", len(documents), collection.value, root)
        return documents

    def discover_files(self, root_dir: Path) -> list[Path]:
        """
        Recursively list markdown files under a directory.

        Entries are visited in name order; symlinks are neither followed nor
        collected.
        """
        found: list[Path] = []
        with os.scandir(root_dir) as it:
            entries = sorted(it, key=lambda entry: entry.name)

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                found.extend(self.discover_files(Path(entry.path)))
            elif entry.is_file(follow_symlinks=False) and self.config.is_markdown_file(entry.name):
                found.append(Path(entry.path))
        return found

    def make_key(self, root_dir: Path, file_path: Path) -> str:
        """
        Derive a document key from its location.

        E.g. ``<root>/tool/git.md`` becomes ``tool/git``.
        """
        relative = Path(file_path).relative_to(root_dir).as_posix()
        extension = self.config.markdown_extension
        if relative.endswith(extension):
            relative = relative[: -len(extension)]
        return relative
