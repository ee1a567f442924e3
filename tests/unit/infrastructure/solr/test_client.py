"""Tests for HttpSolrClient against httpx.MockTransport."""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from solrbridge.domain.index.model.update import UpdateCommand
from solrbridge.domain.search.model.query import CompiledQuery
from solrbridge.domain.shared.error import RemoteQueryError, RemoteSyncError
from solrbridge.infrastructure.solr.client import HttpSolrClient, dict_params

BASE_URL = "http://solr.test:8983/solr"


def make_client(handler) -> tuple[HttpSolrClient, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(recording))
    return HttpSolrClient(client=http), requests


def ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"responseHeader": {"status": 0, "QTime": 4}})


class TestUpdate:
    @pytest.mark.asyncio
    async def test_add_posts_document_list_with_commit(self):
        client, requests = make_client(ok)

        result = await client.update("main", UpdateCommand(add=[{"id": "1-Page"}]))

        [request] = requests
        assert request.method == "POST"
        assert request.url.path == "/solr/main/update"
        assert request.url.params["commit"] == "true"
        assert request.url.params["wt"] == "json"
        assert json.loads(request.content) == [{"id": "1-Page"}]
        assert result.core == "main"
        assert result.status == 0
        assert result.query_time == 4

    @pytest.mark.asyncio
    async def test_delete_ids_body(self):
        client, requests = make_client(ok)

        await client.update("main", UpdateCommand(delete_ids=["42-Article"]))

        assert json.loads(requests[0].content) == {"delete": ["42-Article"]}
        assert requests[0].url.params["commit"] == "true"

    @pytest.mark.asyncio
    async def test_delete_query_body(self):
        client, requests = make_client(ok)

        await client.update("main", UpdateCommand(delete_query="*:*"))

        assert json.loads(requests[0].content) == {"delete": {"query": "*:*"}}

    @pytest.mark.asyncio
    async def test_http_error_becomes_remote_sync_error(self):
        client, _ = make_client(
            lambda request: httpx.Response(400, json={"error": {"msg": "undefined field Foo"}})
        )

        with pytest.raises(RemoteSyncError) as exc_info:
            await client.update("main", UpdateCommand(add=[{"id": "1-Page"}]))

        assert exc_info.value.core == "main"
        assert "undefined field Foo" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_transport_error_becomes_remote_sync_error(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = make_client(refuse)

        with pytest.raises(RemoteSyncError):
            await client.update("main", UpdateCommand(add=[{"id": "1-Page"}]))

    @pytest.mark.asyncio
    async def test_nonzero_status_raises(self):
        client, _ = make_client(
            lambda request: httpx.Response(200, json={"responseHeader": {"status": 1}})
        )

        with pytest.raises(RemoteSyncError):
            await client.update("main", UpdateCommand(add=[{"id": "1-Page"}]))


class TestSelect:
    @pytest.mark.asyncio
    async def test_select_form_encodes_repeated_params(self):
        client, requests = make_client(
            lambda request: httpx.Response(200, json={"response": {"numFound": 0, "docs": []}})
        )
        query = CompiledQuery(
            core="main",
            params=[("q", "dog"), ("fq", "A:(1)"), ("fq", "-B:(2)")],
            query_terms=["dog"],
        )

        raw = await client.select(query)

        [request] = requests
        assert request.url.path == "/solr/main/select"
        form = parse_qs(request.content.decode())
        assert form["q"] == ["dog"]
        assert form["fq"] == ["A:(1)", "-B:(2)"]
        assert form["wt"] == ["json"]
        assert raw["response"]["numFound"] == 0

    @pytest.mark.asyncio
    async def test_server_error_becomes_remote_query_error(self):
        client, _ = make_client(lambda request: httpx.Response(500, text="boom"))
        query = CompiledQuery(core="main", params=[("q", "*:*")], query_terms=[])

        with pytest.raises(RemoteQueryError) as exc_info:
            await client.select(query)

        assert "HTTP 500" in exc_info.value.message


def test_dict_params_groups_repeated_keys():
    assert dict_params([("fq", "a"), ("q", "x"), ("fq", "b")]) == {"fq": ["a", "b"], "q": ["x"]}
