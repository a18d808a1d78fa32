"""
Parsers package for markdown documents.

Provides the frontmatter parser, the file-level markdown parser, and the
heading-based section splitter.
"""

from .frontmatter_parser import FrontmatterParser
from .markdown_parser import MarkdownParser
from .section_splitter import SectionSplitter, slugify

__all__ = [
    "FrontmatterParser",
    "MarkdownParser",
    "SectionSplitter",
    "slugify",
]
