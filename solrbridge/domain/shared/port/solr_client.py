from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Protocol

from solrbridge.domain.shared.port import Port

if TYPE_CHECKING:
    from solrbridge.domain.index.model.update import UpdateCommand, UpdateResult
    from solrbridge.domain.search.model.query import CompiledQuery


class SolrClient(Port, Protocol):
    """Transport to a Solr server. One client serves every core."""

    @abstractmethod
    async def update(self, core: str, command: UpdateCommand) -> UpdateResult:
        """Apply a mutation to ``core``.

        Raises:
            RemoteSyncError: Solr rejected the update or was unreachable.
        """
        ...

    @abstractmethod
    async def select(self, query: CompiledQuery) -> dict[str, Any]:
        """Run a compiled query and return the raw JSON response.

        Raises:
            RemoteQueryError: Solr rejected the query or was unreachable.
        """
        ...
