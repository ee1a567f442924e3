"""DI provider for the Solr HTTP adapter."""

from typing import AsyncIterable, NewType

import httpx
from dishka import provide

from solrbridge.config import Config
from solrbridge.domain.shared.port.solr_client import SolrClient
from solrbridge.infrastructure.solr.client import HttpSolrClient
from solrbridge.util.di.base import Provider
from solrbridge.util.di.scope import Scope

SolrHttpClient = NewType("SolrHttpClient", httpx.AsyncClient)


class SolrProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_http_client(self, config: Config) -> AsyncIterable[SolrHttpClient]:
        """One pooled client for every core, closed with the container."""
        client = httpx.AsyncClient(
            base_url=config.solr.base_url,
            auth=config.solr.auth,
            timeout=config.solr.timeout,
        )
        yield SolrHttpClient(client)
        await client.aclose()

    @provide(scope=Scope.APP, provides=SolrClient)
    def get_solr_client(self, client: SolrHttpClient) -> HttpSolrClient:
        return HttpSolrClient(client=client)
