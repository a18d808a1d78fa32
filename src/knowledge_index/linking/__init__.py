"""Cross-collection dependency linking."""

from knowledge_index.linking.dependency_linker import DependencyLinker, parse_dependency_reference

__all__ = ["DependencyLinker", "parse_dependency_reference"]
