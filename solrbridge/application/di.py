from dishka import AsyncContainer, from_context, make_async_container

from solrbridge.config import Config
from solrbridge.domain.search.util.di.provider import SearchProvider
from solrbridge.infrastructure.index.di import IndexProvider
from solrbridge.infrastructure.persistence.di import PersistenceProvider
from solrbridge.infrastructure.solr.di import SolrProvider
from solrbridge.util.di.base import Provider
from solrbridge.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        SolrProvider(),
        IndexProvider(),
        SearchProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
