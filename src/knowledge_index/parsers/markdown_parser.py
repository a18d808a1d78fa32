"""
Markdown document parser implementation.

Reads markdown files from disk and splits them into frontmatter metadata and
body content using FrontmatterParser.
"""

import asyncio
import logging
from pathlib import Path

from knowledge_index.core.interfaces import IDocumentParser
from knowledge_index.models.document import ParsedMarkdown
from knowledge_index.models.exceptions import DocumentParsingError
from knowledge_index.parsers.frontmatter_parser import FrontmatterParser

logger = logging.getLogger(__name__)


class MarkdownParser(IDocumentParser):
    """
    Parser for markdown files with frontmatter support.

    Read failures are hard errors for the file; frontmatter failures degrade
    to empty metadata.
    """

    def __init__(self, frontmatter_parser: FrontmatterParser | None = None):
        """Initialize the markdown parser."""
        self.frontmatter_parser = frontmatter_parser or FrontmatterParser()

    async def parse_file(self, file_path: Path) -> ParsedMarkdown:
        """
        Parse a markdown file without blocking the event loop.

        Args:
            file_path: Path to the markdown file to parse

        Returns:
            ParsedMarkdown with metadata and trimmed content

        Raises:
            DocumentParsingError: If the file cannot be read
        """
        text = await asyncio.to_thread(self.read_file, file_path)
        return self.frontmatter_parser.parse_string(text, source=str(file_path))

    def read_file(self, file_path: Path) -> str:
        """
        Read a file as UTF-8 text.

        Raises:
            DocumentParsingError: If the file is missing, unreadable or not UTF-8
        """
        logger.debug("Reading markdown file %s", file_path)
        try:
            return Path(file_path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DocumentParsingError(
                f"File encoding error: {file_path}",
                file_path=str(file_path),
                parsing_stage="decoding",
                underlying_error=e,
            ) from e
        except OSError as e:
            logger.error("Error reading file %s: %s", file_path, e)
            raise DocumentParsingError(
                f"Failed to read file: {file_path}",
                file_path=str(file_path),
                parsing_stage="file_reading",
                underlying_error=e,
            ) from e
