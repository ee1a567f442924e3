from dishka import provide

from solrbridge.domain.search.service.builder import QueryBuilder
from solrbridge.domain.search.service.search import SearchExecutor
from solrbridge.domain.shared.port.solr_client import SolrClient
from solrbridge.util.di.base import Provider
from solrbridge.util.di.scope import Scope


class SearchProvider(Provider):
    query_builder = provide(QueryBuilder, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def get_search_executor(self, builder: QueryBuilder, client: SolrClient) -> SearchExecutor:
        return SearchExecutor(builder=builder, client=client)
