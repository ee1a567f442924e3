"""IndexSyncService - pushes object changes to every applicable Solr core."""

import logging
from collections.abc import Sequence

import logfire

from solrbridge.domain.index.model.definition import IndexDefinition
from solrbridge.domain.index.model.hierarchy import ClassHierarchy
from solrbridge.domain.index.model.registry import IndexRegistry
from solrbridge.domain.index.model.update import OperationType, UpdateCommand, UpdateResult
from solrbridge.domain.index.port.indexable import Indexable
from solrbridge.domain.index.service.document import DocumentFactory, object_key
from solrbridge.domain.shared.error import ValidationError
from solrbridge.domain.shared.port.solr_client import SolrClient
from solrbridge.domain.shared.service import Service
from solrbridge.domain.shared.versioning import Stage, reading_stage

logger = logging.getLogger(__name__)


def is_hidden(item: Indexable) -> bool:
    """True only when the visibility flag is set and false; an unset flag is visible."""
    return item.show_in_search is not None and not item.show_in_search


class IndexSyncService(Service):
    """Decides which cores an object belongs to and submits the mutation.

    Dirty bookkeeping is the caller's concern; see IndexChangeHook.
    """

    indexes: IndexRegistry
    hierarchy: ClassHierarchy
    documents: DocumentFactory
    client: SolrClient

    def is_valid_class(self, class_name: str) -> bool:
        """Whether any enabled index holds ``class_name`` or one of its ancestors."""
        return any(
            self.hierarchy.intersects(class_name, index.classes)
            for _, index in self.indexes.items()
        )

    async def sync(
        self,
        items: Sequence[Indexable],
        type: OperationType,
        index_name: str | None = None,
    ) -> UpdateResult | None:
        """Push ``items`` to every applicable index.

        Fields are read under the LIVE stage; the caller's stage is restored afterwards.

        Args:
            items: Non-empty batch of objects from a single class hierarchy.
            type: The operation to apply.
            index_name: Restrict the push to this index.

        Returns:
            The result of the last update sent, or None if no index applied.

        Raises:
            UnknownIndexError: ``index_name`` is not configured.
            RemoteSyncError: Solr failed to apply an update.
        """
        if not items:
            raise ValidationError("Cannot sync an empty batch", field="items")

        candidates = self.indexes.resolve(index_name)
        class_name = items[0].class_name
        result = None

        # Versioned objects are indexed as published
        with logfire.span(
            "IndexSyncService.sync", class_name=class_name, type=str(type), count=len(items)
        ), reading_stage(Stage.LIVE):
            for index in candidates:
                # Nothing to send for classes the index does not hold
                if not self.hierarchy.intersects(class_name, index.classes):
                    continue

                for command in self._commands(items, type, index):
                    result = await self.client.update(index.core, command)

                logger.debug(f"Synced {len(items)} {class_name} item(s) to '{index.name}' ({type})")

        return result

    def _commands(
        self,
        items: Sequence[Indexable],
        type: OperationType,
        index: IndexDefinition,
    ) -> list[UpdateCommand]:
        if type is OperationType.DELETE_ALL:
            return [UpdateCommand(delete_query="*:*")]

        if type is OperationType.DELETE:
            return [UpdateCommand(delete_ids=[str(object_key(item)) for item in items])]

        hidden = [item for item in items if is_hidden(item)]
        visible = [item for item in items if not is_hidden(item)]

        commands = []
        if hidden:
            commands.append(UpdateCommand(delete_ids=[str(object_key(item)) for item in hidden]))
        if visible:
            docs = self.documents.build(visible, index.fields_for_indexing())
            commands.append(UpdateCommand(add=docs))
        return commands
