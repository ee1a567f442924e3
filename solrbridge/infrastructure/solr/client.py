"""HTTP adapter for the SolrClient port."""

import logging
from typing import Any

import httpx

from solrbridge.domain.index.model.update import UpdateCommand, UpdateResult
from solrbridge.domain.search.model.query import CompiledQuery
from solrbridge.domain.shared.error import RemoteQueryError, RemoteSyncError
from solrbridge.domain.shared.port.solr_client import SolrClient

logger = logging.getLogger(__name__)


def _update_body(command: UpdateCommand) -> Any:
    """JSON body for ``/update``: a bare document list, or a delete command."""
    if command.delete_query is not None:
        return {"delete": {"query": command.delete_query}}
    if command.delete_ids:
        return {"delete": command.delete_ids}
    return command.add


class HttpSolrClient(SolrClient):
    """Talks to Solr's JSON API over httpx.

    ``client`` is expected to carry the Solr base URL (``http://host:8983/solr``).
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def update(self, core: str, command: UpdateCommand) -> UpdateResult:
        params = {"wt": "json"}
        if command.commit:
            params["commit"] = "true"

        try:
            response = await self._client.post(
                f"/{core}/update", params=params, json=_update_body(command)
            )
            response.raise_for_status()
            header = response.json().get("responseHeader", {})
        except httpx.HTTPStatusError as e:
            raise RemoteSyncError(core, _solr_error(e.response)) from e
        except (httpx.HTTPError, ValueError) as e:
            raise RemoteSyncError(core, str(e)) from e

        status = int(header.get("status", 0))
        if status != 0:
            raise RemoteSyncError(core, f"status {status}")

        return UpdateResult(core=core, status=status, query_time=int(header.get("QTime", 0)))

    async def select(self, query: CompiledQuery) -> dict[str, Any]:
        params = [*query.params, ("wt", "json")]

        try:
            response = await self._client.post(f"/{query.core}/select", data=dict_params(params))
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise RemoteQueryError(query.core, _solr_error(e.response)) from e
        except (httpx.HTTPError, ValueError) as e:
            raise RemoteQueryError(query.core, str(e)) from e


def dict_params(params: list[tuple[str, str]]) -> dict[str, list[str]]:
    """Group repeated parameters (``fq``, ``facet.field``) for form encoding."""
    grouped: dict[str, list[str]] = {}
    for key, value in params:
        grouped.setdefault(key, []).append(value)
    return grouped


def _solr_error(response: httpx.Response) -> str:
    """Solr's own error message if the body carries one, else the status line."""
    try:
        msg = response.json().get("error", {}).get("msg")
    except ValueError:
        msg = None
    return msg or f"HTTP {response.status_code}"
