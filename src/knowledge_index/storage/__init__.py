"""In-memory storage for loaded document collections."""

from knowledge_index.storage.document_store import DocumentStore

__all__ = ["DocumentStore"]
