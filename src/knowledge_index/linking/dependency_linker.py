"""
Dependency linker for task templates and knowledge documents.

Task templates declare the knowledge they rely on in their frontmatter as
``dependencies: [knowledge/<path>.md, ...]``. The linker resolves those
references against the knowledge collection and records the link on both
sides, as keys into the owning collections.
"""

import logging
import re

from knowledge_index.core.interfaces import IDependencyLinker
from knowledge_index.models.document import Collection, Document
from knowledge_index.models.exceptions import LinkingError
from knowledge_index.models.link import LinkReport, SkippedReference, SkipReason

logger = logging.getLogger(__name__)

DEPENDENCY_PATTERN = re.compile(r"knowledge/(.+)\.md")


def parse_dependency_reference(reference: str) -> str | None:
    """
    Extract the knowledge key from a dependency reference.

    ``knowledge/tool/git.md`` yields ``tool/git``; anything not shaped like
    ``knowledge/<path>.md`` yields None.
    """
    match = DEPENDENCY_PATTERN.fullmatch(reference)
    if not match:
        return None
    return match.group(1)


class DependencyLinker(IDependencyLinker):
    """
    Builds the bidirectional task/knowledge dependency graph.

    Both sides are reset at the start of every call, so linking the same
    collections again yields the same graph. References that are malformed or
    name no known knowledge document are skipped, never raised.
    """

    def __init__(self, warn_on_unresolved: bool = False):
        self.warn_on_unresolved = warn_on_unresolved

    def link(self, knowledge: dict[str, Document], tasks: dict[str, Document]) -> LinkReport:
        """
        Populate ``knowledge_deps`` on tasks and ``dependents`` on knowledge.

        Args:
            knowledge: Knowledge collection keyed by document key
            tasks: Task template collection keyed by document key

        Returns:
            LinkReport with link counts and skipped references

        Raises:
            LinkingError: If a document sits in the wrong collection
        """
        self._check_collection(knowledge, Collection.KNOWLEDGE)
        self._check_collection(tasks, Collection.TASKS)

        for document in knowledge.values():
            document.dependents = []
        for task in tasks.values():
            task.knowledge_deps = []

        report = LinkReport()
        log_skip = logger.warning if self.warn_on_unresolved else logger.debug

        for task in tasks.values():
            report.tasks_processed += 1
            knowledge_deps: list[str] = []

            for reference in task.dependencies:
                knowledge_key = parse_dependency_reference(reference)
                if knowledge_key is None:
                    report.skipped.append(
                        SkippedReference(task_key=task.key, reference=reference, reason=SkipReason.MALFORMED)
                    )
                    log_skip("Skipping malformed dependency '%s' in %s", reference, task.key)
                    continue

                target = knowledge.get(knowledge_key)
                if target is None:
                    report.skipped.append(
                        SkippedReference(task_key=task.key, reference=reference, reason=SkipReason.UNRESOLVED)
                    )
                    log_skip("Skipping unresolved dependency '%s' in %s", reference, task.key)
                    continue

                knowledge_deps.append(target.key)
                target.dependents = [*target.dependents, task.key]
                report.links_created += 1

            task.knowledge_deps = knowledge_deps

        logger.info(
            "Linked %d task templates: %d links, %d skipped references",
            report.tasks_processed,
            report.links_created,
            len(report.skipped),
        )
        return report

    def _check_collection(self, documents: dict[str, Document], expected: Collection) -> None:
        for key, document in documents.items():
            if document.collection != expected:
                raise LinkingError(
                    f"Document '{key}' belongs to {document.collection.value}, expected {expected.value}",
                    document_key=key,
                )
