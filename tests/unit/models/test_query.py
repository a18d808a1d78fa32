"""Unit tests for query models."""

import pytest
from pydantic import ValidationError

from knowledge_index.models import (
    CatalogEntry,
    Collection,
    Document,
    FetchResult,
    FetchStatus,
    MatchType,
    RankedResult,
    SearchResponse,
    SearchStatus,
    TaskTemplateInfo,
)
from knowledge_index.models.query import to_percentage


@pytest.mark.parametrize(
    "score, expected",
    [(0.0, 0), (0.125, 13), (0.375, 38), (0.48, 48), (0.8, 80), (1.0, 100)],
)
def test_to_percentage(score, expected):
    """Test half-up rounding of scores."""
    assert to_percentage(score) == expected


class TestRankedResult:
    """Test cases for RankedResult model."""

    def test_create_valid_result(self):
        """Test creating a ranked result."""
        result = RankedResult(id="deploy/release", description="Cut a release", score=0.8, match_type=MatchType.BOTH)

        assert result.relevance == 80
        assert result.relevance_label == "80%"
        assert str(result) == "Result(deploy/release: 80%, both)"

    def test_serialized_fields(self):
        """Test that computed relevance appears in dumps."""
        data = RankedResult(id="a", score=0.5, match_type=MatchType.KEYWORD).model_dump(mode="json")

        assert data["relevance_label"] == "50%"
        assert data["match_type"] == "keyword"
        assert data["description"] == ""

    @pytest.mark.parametrize("score", [-0.1, 1.5])
    def test_score_bounds(self, score):
        """Test that scores outside 0..1 are rejected."""
        with pytest.raises(ValidationError):
            RankedResult(id="a", score=score, match_type=MatchType.SIMILARITY)


class TestSearchResponse:
    """Test cases for SearchResponse model."""

    def test_ok_response(self):
        """Test a successful response."""
        result = RankedResult(id="a", score=0.5, match_type=MatchType.KEYWORD)
        response = SearchResponse(query="a", status=SearchStatus.OK, results=[result], total_documents_searched=3)

        assert response.has_results is True
        assert response.total_results == 1
        assert str(response) == "SearchResponse(ok, 1 results)"

    def test_ok_requires_results(self):
        """Test that OK cannot be empty."""
        with pytest.raises(ValidationError) as exc_info:
            SearchResponse(query="a", status=SearchStatus.OK)

        assert "status must be OK exactly when results are present" in str(exc_info.value)

    def test_non_ok_forbids_results(self):
        """Test that NO_MATCHES cannot carry results."""
        result = RankedResult(id="a", score=0.5, match_type=MatchType.KEYWORD)

        with pytest.raises(ValidationError):
            SearchResponse(query="a", status=SearchStatus.NO_MATCHES, results=[result])

    def test_query_kept_as_received(self):
        """Test that non-string queries are echoed back."""
        response = SearchResponse(query=42, status=SearchStatus.INVALID_QUERY, message="bad")

        assert response.query == 42
        assert response.has_results is False


class TestCatalogModels:
    """Test cases for catalog projections."""

    def test_catalog_entry_is_frozen(self):
        """Test that catalog entries are immutable."""
        entry = CatalogEntry(id="a", description="b")

        with pytest.raises(ValidationError):
            entry.id = "c"

    @pytest.mark.parametrize("example, expected", [(None, ""), ("Run it", "Run it"), (3, "3")])
    def test_task_template_example_coerced(self, example, expected):
        """Test that examples are always text."""
        info = TaskTemplateInfo(id="a", name="A", example=example)

        assert info.example == expected


class TestFetchResult:
    """Test cases for FetchResult model."""

    def make_document(self):
        """Create a task template document."""
        return Document(
            key="deploy/release",
            file_path="/context/task-templates/deploy/release.md",
            collection=Collection.TASKS,
        )

    def test_found(self):
        """Test a successful lookup."""
        result = FetchResult(id="deploy/release", status=FetchStatus.FOUND, document=self.make_document())

        assert result.found is True
        assert result.knowledge_deps == []
        assert str(result) == "FetchResult('deploy/release', found, 0 deps)"

    def test_found_requires_document(self):
        """Test that FOUND without a document is rejected."""
        with pytest.raises(ValidationError):
            FetchResult(id="a", status=FetchStatus.FOUND)

    @pytest.mark.parametrize("status", [FetchStatus.NOT_FOUND, FetchStatus.INVALID_ID])
    def test_missing_statuses_forbid_document(self, status):
        """Test that only FOUND carries a document."""
        with pytest.raises(ValidationError):
            FetchResult(id="a", status=status, document=self.make_document())

        assert FetchResult(id="a", status=status).found is False
