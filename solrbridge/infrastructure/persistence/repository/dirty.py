import json
import logging
from typing import Any, List

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from solrbridge.domain.dirty.model.value import DirtyRecord
from solrbridge.domain.dirty.port.repository import DirtyRecordRepository
from solrbridge.domain.index.model.update import OperationType
from solrbridge.domain.shared.error import MalformedDirtyRecordError
from solrbridge.infrastructure.persistence.tables import dirty_classes_table

logger = logging.getLogger(__name__)


def _parse_ids(class_name: str, type: str, raw: str | None) -> list[int]:
    if not raw:
        return []
    try:
        decoded = json.loads(raw)
        if not isinstance(decoded, list):
            raise ValueError("not a list")
        # Older rows may hold IDs as numeric strings
        ids = [int(i) for i in decoded if not isinstance(i, bool)]
    except (TypeError, ValueError) as e:
        raise MalformedDirtyRecordError(class_name, type, raw) from e
    return list(dict.fromkeys(ids))


def _row_to_record(row: dict[str, Any]) -> DirtyRecord:
    return DirtyRecord(
        class_name=row["class_name"],
        type=OperationType(row["type"]),
        ids=_parse_ids(row["class_name"], row["type"], row["ids"]),
    )


class SQLAlchemyDirtyRecordRepository(DirtyRecordRepository):
    """Dirty records in the ``dirty_classes`` table.

    Saves are committed immediately, independent of the surrounding unit of
    work, so a recorded failure or success survives a later rollback.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, class_name: str, type: OperationType) -> DirtyRecord | None:
        stmt = select(dirty_classes_table).where(
            dirty_classes_table.c.class_name == class_name,
            dirty_classes_table.c.type == str(type),
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_record(dict(row)) if row else None

    async def save(self, record: DirtyRecord) -> None:
        encoded = json.dumps(record.ids)
        stmt = select(dirty_classes_table.c.id).where(
            dirty_classes_table.c.class_name == record.class_name,
            dirty_classes_table.c.type == str(record.type),
        )
        existing = (await self.session.execute(stmt)).scalar_one_or_none()

        if existing is None:
            await self.session.execute(
                insert(dirty_classes_table).values(
                    class_name=record.class_name,
                    type=str(record.type),
                    ids=encoded,
                )
            )
        else:
            await self.session.execute(
                update(dirty_classes_table)
                .where(dirty_classes_table.c.id == existing)
                .values(ids=encoded)
            )
        await self.session.commit()

    async def list(self, type: OperationType | None = None) -> List[DirtyRecord]:
        stmt = select(dirty_classes_table).order_by(dirty_classes_table.c.id)
        if type is not None:
            stmt = stmt.where(dirty_classes_table.c.type == str(type))

        result = await self.session.execute(stmt)
        records = []
        for row in result.mappings().all():
            try:
                records.append(_row_to_record(dict(row)))
            except MalformedDirtyRecordError as e:
                logger.warning(f"Skipping dirty record: {e.message}")
        return records
