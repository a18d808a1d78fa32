"""
Frontmatter parser for extracting YAML metadata from markdown text.

A frontmatter block is a line of ``---``, a YAML mapping, and a closing
``---`` line, anchored at the very start of the text. Invalid YAML never
fails the document: the error is logged and the text is kept whole.
"""

import logging
import re
from typing import Any

import yaml
from frontmatter.default_handlers import YAMLHandler

from knowledge_index.models.document import ParsedMarkdown
from knowledge_index.models.exceptions import FrontmatterError

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


class FrontmatterParser:
    """
    Parser for splitting YAML frontmatter from markdown text.

    Every frontmatter key is kept verbatim; interpreting the core fields is
    left to the document model.
    """

    def __init__(self):
        """Initialize the frontmatter parser."""
        self.handler = YAMLHandler()

    def parse_string(self, text: str, source: str | None = None) -> ParsedMarkdown:
        """
        Parse frontmatter from a markdown string.

        Args:
            text: Markdown text with optional frontmatter
            source: Optional file path for logging context

        Returns:
            ParsedMarkdown with metadata and trimmed body. When the block is
            absent, or its YAML is invalid, metadata is empty and the body is
            the whole text.
        """
        match = FRONTMATTER_PATTERN.match(text)
        if not match:
            return ParsedMarkdown(metadata={}, content=text.strip())

        try:
            metadata = self.load_metadata(match.group(1) or "", source)
        except FrontmatterError as e:
            logger.error("Error parsing YAML frontmatter in %s: %s", source or "string content", e)
            return ParsedMarkdown(metadata={}, content=text.strip())

        return ParsedMarkdown(metadata=metadata, content=text[match.end():].strip(), has_frontmatter=True)

    def load_metadata(self, block: str, source: str | None = None) -> dict[str, Any]:
        """
        Load a captured YAML block into a mapping.

        Args:
            block: YAML text between the delimiters
            source: Optional file path for error context

        Returns:
            Metadata mapping (empty for an empty block)

        Raises:
            FrontmatterError: If the YAML is invalid or not a mapping
        """
        try:
            loaded = self.handler.load(block)
        except yaml.YAMLError as e:
            raise FrontmatterError(f"Invalid YAML frontmatter: {e}", file_path=source, underlying_error=e) from e

        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise FrontmatterError(
                f"Frontmatter must be a mapping, got {type(loaded).__name__}",
                file_path=source,
            )
        return {str(k): v for k, v in loaded.items()}

    def has_frontmatter(self, text: str) -> bool:
        """
        Check if text starts with a frontmatter block without loading it.

        Args:
            text: Markdown text

        Returns:
            True if the delimiter pattern is present
        """
        return FRONTMATTER_PATTERN.match(text) is not None
