"""
Hybrid keyword and similarity search over one document collection.

Each document is represented by the string ``"<id> <description>"``. A query
is scored against every document twice, once by keyword overlap and once by
bigram similarity, and the better of the two scores ranks the document.
"""

import logging
from typing import Any

from knowledge_index.config.settings import IndexConfig
from knowledge_index.core.interfaces import ISearchIndex
from knowledge_index.models.document import Document
from knowledge_index.models.query import CatalogEntry, MatchType, RankedResult, SearchResponse, SearchStatus
from knowledge_index.search.similarity import rate_all

logger = logging.getLogger(__name__)

INVALID_QUERY_MESSAGE = "Please provide a search query."


class HybridSearchIndex(ISearchIndex):
    """
    Immutable search index built once over a loaded collection.

    Corpus strings and summaries are kept in parallel tuples so that the
    position of a document is its identity during scoring; ties in the final
    ranking keep that order.
    """

    def __init__(self, config: IndexConfig, documents: dict[str, Document]):
        """
        Build the index.

        Args:
            config: Search configuration (weights, threshold, result limit)
            documents: Loaded collection to index
        """
        self.config = config

        corpus: list[str] = []
        summaries: list[CatalogEntry] = []
        for document in documents.values():
            corpus.append(f"{document.id} {document.description}")
            summaries.append(CatalogEntry(id=document.id, description=document.description))

        self._corpus = tuple(corpus)
        self._corpus_lower = tuple(text.lower() for text in corpus)
        self._summaries = tuple(summaries)

        logger.info("Indexed %d documents for search", len(self._summaries))

    @property
    def size(self) -> int:
        """Get the number of indexed documents."""
        return len(self._summaries)

    def search(self, query: Any) -> SearchResponse:
        """
        Rank indexed documents against a free-text query.

        Args:
            query: Free-text query

        Returns:
            SearchResponse; INVALID_QUERY for a non-string or empty query,
            NO_MATCHES when nothing scores, OK otherwise
        """
        if not isinstance(query, str) or not query:
            logger.debug("Rejected invalid query: %r", query)
            return SearchResponse(
                query=query,
                status=SearchStatus.INVALID_QUERY,
                message=INVALID_QUERY_MESSAGE,
                total_documents_searched=self.size,
            )

        scores: dict[int, tuple[float, MatchType]] = {}
        self._keyword_pass(query, scores)
        self._similarity_pass(query, scores)
        results = self._rank(scores)

        logger.debug("Search for %r matched %d documents, returning %d", query, len(scores), len(results))

        if not results:
            return SearchResponse(
                query=query,
                status=SearchStatus.NO_MATCHES,
                message=f'No documents found matching "{query}".',
                total_documents_searched=self.size,
            )

        return SearchResponse(
            query=query,
            status=SearchStatus.OK,
            results=results,
            total_documents_searched=self.size,
        )

    def keyword_tokens(self, query: str) -> list[str]:
        """Lowercase the query, split on whitespace and drop short tokens."""
        return [token for token in query.lower().split() if len(token) >= self.config.min_keyword_length]

    def _keyword_pass(self, query: str, scores: dict[int, tuple[float, MatchType]]) -> None:
        """
        Score documents by the share of query tokens they contain.

        A token matches when it is a substring of the lowercased corpus
        string; the share is scaled by ``keyword_weight``.
        """
        tokens = self.keyword_tokens(query)
        if not tokens:
            return

        for index, text in enumerate(self._corpus_lower):
            matched_words = sum(1 for token in tokens if token in text)
            if matched_words > 0:
                scores[index] = ((matched_words / len(tokens)) * self.config.keyword_weight, MatchType.KEYWORD)

    def _similarity_pass(self, query: str, scores: dict[int, tuple[float, MatchType]]) -> None:
        """Merge in similarity ratings above the threshold, keeping the higher score."""
        for index, rating in enumerate(rate_all(query, self._corpus)):
            if rating <= self.config.similarity_threshold:
                continue
            existing = scores.get(index)
            if existing is None:
                scores[index] = (rating, MatchType.SIMILARITY)
            else:
                scores[index] = (max(rating, existing[0]), MatchType.BOTH)

    def _rank(self, scores: dict[int, tuple[float, MatchType]]) -> list[RankedResult]:
        """Sort by descending score, ties in corpus order, and truncate."""
        ranked = sorted(scores.items(), key=lambda item: (-item[1][0], item[0]))
        results = []
        for index, (score, match_type) in ranked[: self.config.search_result_limit]:
            summary = self._summaries[index]
            results.append(
                RankedResult(
                    id=summary.id,
                    description=summary.description,
                    score=min(score, 1.0),
                    match_type=match_type,
                )
            )
        return results
