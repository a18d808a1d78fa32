"""
Unit tests for HybridSearchIndex.

Tests query validation, the keyword and similarity passes, score merging,
ranking order and truncation.
"""

import pytest

from knowledge_index.config import IndexConfig
from knowledge_index.core.interfaces import ISearchIndex
from knowledge_index.models import Collection, Document, MatchType, SearchStatus
from knowledge_index.search.search_index import INVALID_QUERY_MESSAGE, HybridSearchIndex


def make_collection(*entries):
    """Build an ordered collection from (key, description) pairs."""
    return {
        key: Document(
            key=key,
            file_path=f"/context/task-templates/{key}.md",
            collection=Collection.TASKS,
            metadata={"description": description} if description is not None else {},
        )
        for key, description in entries
    }


class TestHybridSearchIndex:
    """Test cases for HybridSearchIndex."""

    def setup_method(self):
        """Set up test fixtures."""
        self.config = IndexConfig()
        self.documents = make_collection(
            ("tool/git", "Git version control"),
            ("deploy/release", "Cut a release and deploy it"),
            ("ops/rollback", "Rollback"),
            ("docs/readme", None),
        )
        self.index = HybridSearchIndex(self.config, self.documents)

    def test_initialization(self):
        """Test corpus construction."""
        assert isinstance(self.index, ISearchIndex)
        assert self.index.size == 4

    def test_keyword_match_found(self):
        """Test that a query term in id or description finds the document."""
        response = self.index.search("git")

        assert response.status == SearchStatus.OK
        hit = next(r for r in response.results if r.id == "tool/git")
        assert hit.match_type in (MatchType.KEYWORD, MatchType.BOTH)
        assert hit.relevance > 0
        assert hit.description == "Git version control"

    def test_keyword_and_similarity_merge_with_max(self):
        """Test that a document hit by both passes keeps the higher score."""
        response = self.index.search("git")

        hit = response.results[0]
        assert hit.id == "tool/git"
        assert hit.match_type == MatchType.BOTH
        assert hit.score == pytest.approx(0.8)
        assert hit.relevance == 80
        assert hit.relevance_label == "80%"

    def test_partial_keyword_match_scales_score(self):
        """Test the keyword share: one of two tokens scores 0.4."""
        response = self.index.search("git kubernetes")

        hit = next(r for r in response.results if r.id == "tool/git")
        assert hit.score == pytest.approx(0.4)
        assert hit.relevance == 40

    def test_similarity_only_match(self):
        """Test that a misspelled query still finds a close document."""
        response = self.index.search("rolback")

        hit = next(r for r in response.results if r.id == "ops/rollback")
        assert hit.match_type == MatchType.SIMILARITY
        assert hit.score == pytest.approx(0.48)
        assert hit.relevance == 48

    def test_short_tokens_do_not_keyword_match(self):
        """Test that tokens of two characters or fewer are ignored."""
        response = self.index.search("it a")

        assert all(r.match_type == MatchType.SIMILARITY for r in response.results)

    def test_keyword_match_is_case_insensitive(self):
        """Test lowercase matching of query tokens."""
        response = self.index.search("ROLLBACK")

        hit = next(r for r in response.results if r.id == "ops/rollback")
        assert hit.match_type in (MatchType.KEYWORD, MatchType.BOTH)

    def test_missing_description_indexes_id(self):
        """Test that a document without description is searchable by id."""
        response = self.index.search("readme")

        assert any(r.id == "docs/readme" and r.description == "" for r in response.results)

    @pytest.mark.parametrize("query", ["", None, 42, ["git"]])
    def test_invalid_query(self, query):
        """Test that non-string and empty queries are rejected."""
        response = self.index.search(query)

        assert response.status == SearchStatus.INVALID_QUERY
        assert response.results == []
        assert response.message == INVALID_QUERY_MESSAGE

    @pytest.mark.parametrize("query", ["   ", "\t\n"])
    def test_whitespace_query_matches_nothing(self, query):
        """Test that a blank string is a valid query with no results."""
        response = self.index.search(query)

        assert response.status == SearchStatus.NO_MATCHES
        assert response.query == query

    def test_no_matches_is_distinct_from_invalid(self):
        """Test the empty result outcome."""
        response = self.index.search("zzzzqqq")

        assert response.status == SearchStatus.NO_MATCHES
        assert response.has_results is False
        assert "zzzzqqq" in response.message
        assert response.total_documents_searched == 4

    def test_results_sorted_by_descending_score(self):
        """Test ranking order."""
        response = self.index.search("release deploy")

        scores = [r.score for r in response.results]
        assert scores == sorted(scores, reverse=True)
        assert response.results[0].id == "deploy/release"

    def test_scores_within_bounds(self):
        """Test that merged scores stay within 0..1 and keyword scores within 0..0.8."""
        for query in ["git", "release deploy", "rolback", "version control git", "deploy/release"]:
            for result in self.index.search(query).results:
                assert 0.0 <= result.score <= 1.0
                if result.match_type == MatchType.KEYWORD:
                    assert result.score <= 0.8
                if result.match_type == MatchType.SIMILARITY:
                    assert result.score > self.config.similarity_threshold

    def test_exact_corpus_string_scores_full_similarity(self):
        """Test that a query equal to a corpus string rates 1.0."""
        response = self.index.search("ops/rollback Rollback")

        assert response.results[0].id == "ops/rollback"
        assert response.results[0].score == pytest.approx(1.0)
        assert response.results[0].match_type == MatchType.BOTH

    def test_ties_keep_insertion_order(self):
        """Test deterministic tie-breaking by collection order."""
        documents = make_collection(
            ("zeta/deploy", "Deploy the service"),
            ("alpha/deploy", "Deploy the service"),
        )
        index = HybridSearchIndex(self.config, documents)

        first = index.search("service")
        second = index.search("service")

        assert [r.id for r in first.results] == ["zeta/deploy", "alpha/deploy"]
        assert [r.id for r in second.results] == [r.id for r in first.results]

    def test_results_truncated_to_limit(self):
        """Test that at most search_result_limit results are returned."""
        documents = make_collection(*[(f"task-{i}", f"deploy service {i}") for i in range(15)])
        index = HybridSearchIndex(self.config, documents)

        response = index.search("deploy")

        assert len(response.results) == 10
        assert response.total_results == 10

    def test_custom_limit_and_weight(self):
        """Test configurable limit and keyword weight."""
        config = IndexConfig(search_result_limit=2, keyword_weight=0.5)
        documents = make_collection(*[(f"task-{i}", "deploy service") for i in range(5)])
        index = HybridSearchIndex(config, documents)

        response = index.search("deploy")

        assert len(response.results) == 2
        assert all(r.score == pytest.approx(0.5) or r.match_type == MatchType.BOTH for r in response.results)

    def test_empty_index(self):
        """Test searching an empty collection."""
        index = HybridSearchIndex(self.config, {})

        response = index.search("anything")

        assert response.status == SearchStatus.NO_MATCHES
        assert index.size == 0

    def test_keyword_tokens(self):
        """Test query tokenization."""
        assert self.index.keyword_tokens("  Deploy  the NEW api to k8s ") == ["deploy", "the", "new", "api", "k8s"]
