"""Dependency injection provider for index definitions and synchronization."""

from dishka import provide

from solrbridge.config import Config
from solrbridge.domain.dirty.port.repository import DirtyRecordRepository
from solrbridge.domain.dirty.service.dirty import DirtyRecordStore
from solrbridge.domain.index.listener.change_hook import IndexChangeHook
from solrbridge.domain.index.model.definition import IndexDefinition
from solrbridge.domain.index.model.hierarchy import ClassHierarchy
from solrbridge.domain.index.model.registry import IndexRegistry
from solrbridge.domain.index.service.document import DocumentFactory
from solrbridge.domain.index.service.sync import IndexSyncService
from solrbridge.domain.shared.port.solr_client import SolrClient
from solrbridge.util.di.base import Provider
from solrbridge.util.di.scope import Scope


class IndexProvider(Provider):
    @provide(scope=Scope.APP)
    def get_registry(self, config: Config) -> IndexRegistry:
        """Registry of the enabled indexes; disabled ones are invisible to sync and search."""
        indexes: dict[str, IndexDefinition] = {
            idx.name: idx.to_definition() for idx in config.indexes if idx.enabled
        }
        return IndexRegistry(indexes)

    @provide(scope=Scope.APP)
    def get_hierarchy(self, config: Config) -> ClassHierarchy:
        return ClassHierarchy(config.hierarchy)

    @provide(scope=Scope.APP)
    def get_document_factory(self, hierarchy: ClassHierarchy) -> DocumentFactory:
        return DocumentFactory(hierarchy=hierarchy)

    @provide(scope=Scope.APP)
    def get_sync_service(
        self,
        indexes: IndexRegistry,
        hierarchy: ClassHierarchy,
        documents: DocumentFactory,
        client: SolrClient,
    ) -> IndexSyncService:
        return IndexSyncService(
            indexes=indexes,
            hierarchy=hierarchy,
            documents=documents,
            client=client,
        )

    @provide(scope=Scope.UOW)
    def get_dirty_store(self, repo: DirtyRecordRepository) -> DirtyRecordStore:
        return DirtyRecordStore(repo=repo)

    @provide(scope=Scope.UOW)
    def get_change_hook(
        self,
        sync_service: IndexSyncService,
        dirty_store: DirtyRecordStore,
        config: Config,
    ) -> IndexChangeHook:
        return IndexChangeHook(
            sync_service=sync_service,
            dirty_store=dirty_store,
            enabled=config.indexing.enabled,
        )
