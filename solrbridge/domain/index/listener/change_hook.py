"""IndexChangeHook - reacts to object store writes and keeps Solr in step."""

import logging

import logfire

from solrbridge.domain.dirty.service.dirty import DirtyRecordStore
from solrbridge.domain.index.model.update import OperationType
from solrbridge.domain.index.port.indexable import Indexable
from solrbridge.domain.index.service.sync import IndexSyncService
from solrbridge.domain.shared.service import Service
from solrbridge.domain.shared.versioning import Stage, indexing_suppressed, reading_stage

logger = logging.getLogger(__name__)


class IndexChangeHook(Service):
    """Called by the object store after create, update, publish and delete.

    Each event pushes the object to Solr and reconciles the dirty record for
    ``(class, operation type)``: a successful push removes the object's ID,
    a failed one adds it for a later reconciliation sweep. Failures are
    logged and never raised, so indexing can not block the write itself.
    """

    sync_service: IndexSyncService
    dirty_store: DirtyRecordStore
    enabled: bool = True

    def should_push(self) -> bool:
        """Whether writes should currently propagate to Solr."""
        return self.enabled and not indexing_suppressed()

    async def on_create(self, obj: Indexable) -> bool:
        # Versioned objects reach the index when they are published
        if not self.should_push() or obj.versioned:
            return False
        return await self._push(obj, OperationType.CREATE)

    async def on_update(self, obj: Indexable) -> bool:
        if not self.should_push() or obj.versioned:
            return False
        return await self._push(obj, OperationType.UPDATE)

    async def on_publish(self, obj: Indexable) -> bool:
        if not self.should_push():
            return False
        return await self._push(obj, OperationType.UPDATE)

    async def on_delete(self, obj: Indexable) -> bool:
        if not self.should_push():
            return False
        return await self._push(obj, OperationType.DELETE)

    async def reindex(self, obj: Indexable) -> bool:
        """Push ``obj`` again regardless of the should-push gate."""
        return await self._push(obj, OperationType.UPDATE)

    async def _push(self, obj: Indexable, type: OperationType) -> bool:
        """Sync one object and reconcile its dirty record.

        Returns:
            True if the object is clean in the index afterwards.
        """
        if not self.sync_service.is_valid_class(obj.class_name):
            return False

        record = await self.dirty_store.get_or_create(obj.class_name, type)

        try:
            with reading_stage(Stage.LIVE):
                await self.sync_service.sync([obj], type)
        except Exception as e:
            await self.dirty_store.append_identifier(record, obj.id)
            logfire.warn(
                "Unable to alter indexed object",
                class_name=obj.class_name,
                object_id=obj.id,
                type=str(type),
            )
            logger.error(f"Unable to alter {obj.class_name} with ID {obj.id}: {e}")
            return False

        await self.dirty_store.remove_identifier(record, obj.id)
        return True
