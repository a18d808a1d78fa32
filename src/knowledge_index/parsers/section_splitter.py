"""
Heading-based section splitter for markdown bodies.

Splits a document body into addressable fragments, one per ATX heading
(``#`` through ``######``). Each fragment runs from its heading line up to
the next heading of any level.
"""

import logging
import re
from uuid import uuid4

from knowledge_index.models.document import Section

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.+)$", re.MULTILINE)

CONTENT_FRAGMENT = "content"
PREAMBLE_FRAGMENT = "preamble"
FALLBACK_SLUG = "section"


def slugify(title: str) -> str:
    """
    Turn a heading title into a URI fragment slug.

    Lowercases, drops everything but ASCII word characters, whitespace and
    hyphens, turns whitespace runs into single hyphens and trims hyphens from
    both ends. Returns ``"section"`` when nothing survives.
    """
    slug = title.lower()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    slug = slug.strip("-")
    return slug or FALLBACK_SLUG


class SectionSplitter:
    """
    Splits markdown content into heading-bounded sections.

    Text before the first heading, if any, becomes a leading ``#preamble``
    section so that the sections together cover the whole body.
    """

    def split(self, content: str, base_uri: str | None = None) -> list[Section]:
        """
        Split content into sections.

        Args:
            content: Markdown body (frontmatter already removed)
            base_uri: URI the fragments are appended to; a ``urn:uuid`` is
                synthesized when absent

        Returns:
            Sections in source order
        """
        base = base_uri or f"urn:uuid:{uuid4()}"
        matches = list(HEADING_PATTERN.finditer(content))

        if not matches:
            return [
                Section(
                    uri=f"{base}#{CONTENT_FRAGMENT}",
                    text=content.strip(),
                    start_position=0,
                    end_position=len(content),
                )
            ]

        sections: list[Section] = []

        first_start = matches[0].start()
        if content[:first_start].strip():
            sections.append(
                Section(
                    uri=f"{base}#{PREAMBLE_FRAGMENT}",
                    text=content[:first_start].strip(),
                    start_position=0,
                    end_position=first_start,
                )
            )

        for index, match in enumerate(matches):
            start = match.start()
            end = matches[index + 1].start() if index + 1 < len(matches) else len(content)
            title = match.group(2).strip()

            sections.append(
                Section(
                    uri=f"{base}#{slugify(title)}-{index}",
                    text=content[start:end].strip(),
                    heading_level=len(match.group(1)),
                    heading_title=title,
                    start_position=start,
                    end_position=end,
                )
            )

        logger.debug("Split %s into %d sections", base, len(sections))
        return sections
