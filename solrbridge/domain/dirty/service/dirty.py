"""DirtyRecordStore - persisted sets of object IDs awaiting reindexing."""

import logging

from solrbridge.domain.dirty.model.value import DirtyRecord
from solrbridge.domain.dirty.port.repository import DirtyRecordRepository
from solrbridge.domain.index.model.update import OperationType
from solrbridge.domain.shared.error import MalformedDirtyRecordError
from solrbridge.domain.shared.service import Service

logger = logging.getLogger(__name__)


class DirtyRecordStore(Service):
    """Tracks which objects still need to reach the index.

    Every mutation is persisted before returning; there is no in-memory
    dirty state. Updates are read-modify-write on the whole ID list, so
    callers must serialize access per ``(class_name, type)`` key.
    """

    repo: DirtyRecordRepository

    async def get_or_create(self, class_name: str, type: OperationType) -> DirtyRecord:
        """Fetch the record for ``(class_name, type)``, creating it empty if absent.

        A record whose stored IDs cannot be parsed is treated as empty.
        """
        try:
            record = await self.repo.get(class_name, type)
        except MalformedDirtyRecordError as e:
            logger.warning(f"Resetting dirty record {class_name}/{type}: {e.message}")
            record = None

        if record is None:
            record = DirtyRecord(class_name=class_name, type=type)
            await self.repo.save(record)
        return record

    async def ids(self, class_name: str, type: OperationType) -> list[int]:
        record = await self.get_or_create(class_name, type)
        return list(record.ids)

    async def remove_identifier(self, record: DirtyRecord, object_id: int) -> None:
        """Mark ``object_id`` as clean. Absent IDs are ignored."""
        record.discard(object_id)
        await self.repo.save(record)

    async def append_identifier(self, record: DirtyRecord, object_id: int) -> None:
        """Mark ``object_id`` as dirty so a later sweep retries it."""
        record.add(object_id)
        await self.repo.save(record)
