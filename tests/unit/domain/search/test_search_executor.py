"""Unit tests for SearchExecutor and its spellcheck retry."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from solrbridge.domain.index.model.definition import IndexDefinition
from solrbridge.domain.search.model.query import StructuredQuery
from solrbridge.domain.search.service.builder import QueryBuilder
from solrbridge.domain.search.service.search import SearchExecutor, strip_fuzziness
from solrbridge.domain.shared.error import RemoteQueryError
from solrbridge.domain.shared.port.solr_client import SolrClient


def solr_response(num_found: int, collation: str | None = None) -> dict[str, Any]:
    raw: dict[str, Any] = {
        "responseHeader": {"status": 0},
        "response": {
            "numFound": num_found,
            "docs": [{"id": f"{i}-Page", "ObjectID": i, "ClassName": "Page"} for i in range(num_found)],
        },
    }
    if collation is not None:
        raw["spellcheck"] = {"suggestions": [], "collations": ["collation", collation]}
    return raw


@pytest.fixture
def index() -> IndexDefinition:
    return IndexDefinition(name="main", classes=["Page"])


@pytest.fixture
def mock_client() -> SolrClient:
    client = MagicMock(spec=SolrClient)
    client.select = AsyncMock()
    return client


@pytest.fixture
def executor(mock_client) -> SearchExecutor:
    return SearchExecutor(builder=QueryBuilder(), client=mock_client)


def sent_query(mock_client, call: int) -> str:
    return mock_client.select.await_args_list[call].args[0].query


class TestStripFuzziness:
    def test_strips_every_annotation(self):
        assert strip_fuzziness("dog~2 food~1") == "dog food"
        assert strip_fuzziness("dog") == "dog"


class TestSearchExecutor:
    """Tests for the retry state machine."""

    @pytest.mark.asyncio
    async def test_zero_hits_with_collation_retries_once(self, executor, mock_client, index):
        """Zero hits plus a collation retries with the stripped suggestion."""
        # Arrange
        mock_client.select.side_effect = [solr_response(0, "dog~2"), solr_response(3)]
        query = StructuredQuery().add_term("dgo", fuzzy=2)

        # Act
        result = await executor.execute(query, index)

        # Assert
        assert mock_client.select.await_count == 2
        assert sent_query(mock_client, 0) == "dgo~2"
        assert sent_query(mock_client, 1) == "dog~2"
        assert result.total == 3
        assert result.is_retry is True
        assert result.collated_spellcheck == "dog~2"
        assert [t.text for t in query.terms] == ["dgo"]

    @pytest.mark.asyncio
    async def test_retry_sends_stripped_term_text(self, executor, mock_client, index):
        mock_client.select.side_effect = [solr_response(0, "dog~2"), solr_response(1)]

        await executor.execute(StructuredQuery().add_term("dgo"), index)

        assert sent_query(mock_client, 1) == "dog"

    @pytest.mark.asyncio
    async def test_spellcheck_off_never_retries(self, executor, mock_client, index):
        mock_client.select.return_value = solr_response(0, "dog")
        query = StructuredQuery(spellcheck=False).add_term("dgo")

        result = await executor.execute(query, index)

        assert mock_client.select.await_count == 1
        assert result.is_retry is False

    @pytest.mark.asyncio
    async def test_hits_without_follow_do_not_retry(self, executor, mock_client, index):
        mock_client.select.return_value = solr_response(5, "dog")

        result = await executor.execute(StructuredQuery().add_term("dgo"), index)

        assert mock_client.select.await_count == 1
        assert result.total == 5
        assert result.collated_spellcheck == "dog"

    @pytest.mark.asyncio
    async def test_follow_spellcheck_retries_despite_hits(self, executor, mock_client, index):
        mock_client.select.side_effect = [solr_response(5, "dog"), solr_response(8)]
        query = StructuredQuery(follow_spellcheck=True).add_term("dgo")

        result = await executor.execute(query, index)

        assert mock_client.select.await_count == 2
        assert result.total == 8
        assert result.is_retry is True

    @pytest.mark.asyncio
    async def test_no_collation_returns_empty_result(self, executor, mock_client, index):
        mock_client.select.return_value = solr_response(0)

        result = await executor.execute(StructuredQuery().add_term("zzz"), index)

        assert mock_client.select.await_count == 1
        assert result.total == 0

    @pytest.mark.asyncio
    async def test_never_retries_twice(self, executor, mock_client, index):
        """A retry that also returns a collation is final."""
        mock_client.select.side_effect = [
            solr_response(0, "dog"),
            solr_response(0, "dig"),
            solr_response(0, "dug"),
        ]

        result = await executor.execute(StructuredQuery().add_term("dgo"), index)

        assert mock_client.select.await_count == 2
        assert result.is_retry is True
        assert result.collated_spellcheck == "dog"

    @pytest.mark.asyncio
    async def test_executor_holds_no_retry_state(self, executor, mock_client, index):
        """The next execute on the same executor may retry again."""
        mock_client.select.side_effect = [
            solr_response(0, "dog"),
            solr_response(1),
            solr_response(0, "cat"),
            solr_response(2),
        ]

        first = await executor.execute(StructuredQuery().add_term("dgo"), index)
        second = await executor.execute(StructuredQuery().add_term("cta"), index)

        assert first.is_retry and second.is_retry
        assert mock_client.select.await_count == 4

    @pytest.mark.asyncio
    async def test_remote_error_is_reraised(self, executor, mock_client, index):
        mock_client.select.side_effect = RemoteQueryError("main", "HTTP 500")

        with pytest.raises(RemoteQueryError):
            await executor.execute(StructuredQuery().add_term("dog"), index)
