"""Tests for SQLAlchemyDirtyRecordRepository against in-memory SQLite."""

import pytest
import pytest_asyncio
from sqlalchemy import insert

from solrbridge.config import DatabaseConfig
from solrbridge.domain.dirty.model.value import DirtyRecord
from solrbridge.domain.dirty.service.dirty import DirtyRecordStore
from solrbridge.domain.index.model.update import OperationType
from solrbridge.domain.shared.error import MalformedDirtyRecordError
from solrbridge.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from solrbridge.infrastructure.persistence.repository.dirty import (
    SQLAlchemyDirtyRecordRepository,
    _parse_ids,
)
from solrbridge.infrastructure.persistence.tables import dirty_classes_table, metadata


@pytest_asyncio.fixture
async def session():
    engine = create_db_engine(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    factory = create_session_factory(engine)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def repo(session) -> SQLAlchemyDirtyRecordRepository:
    return SQLAlchemyDirtyRecordRepository(session)


async def _insert_raw(session, class_name: str, type: str, ids: str | None) -> None:
    await session.execute(
        insert(dirty_classes_table).values(class_name=class_name, type=type, ids=ids)
    )
    await session.commit()


class TestParseIds:
    def test_empty_values_parse_to_empty_list(self):
        assert _parse_ids("Page", "update", None) == []
        assert _parse_ids("Page", "update", "") == []

    def test_numeric_strings_are_accepted(self):
        assert _parse_ids("Page", "update", '["3", 4]') == [3, 4]

    def test_duplicates_collapse(self):
        assert _parse_ids("Page", "update", "[1, 2, 1]") == [1, 2]

    @pytest.mark.parametrize("raw", ["[1, 2", '{"a": 1}', '["x"]'])
    def test_malformed_raises(self, raw):
        with pytest.raises(MalformedDirtyRecordError) as exc_info:
            _parse_ids("Page", "update", raw)

        assert exc_info.value.raw == raw


class TestSQLAlchemyDirtyRecordRepository:
    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, repo):
        assert await repo.get("Page", OperationType.UPDATE) is None

    @pytest.mark.asyncio
    async def test_save_inserts_then_updates(self, repo):
        record = DirtyRecord(class_name="Page", type=OperationType.UPDATE, ids=[1])
        await repo.save(record)

        record.add(2)
        await repo.save(record)

        loaded = await repo.get("Page", OperationType.UPDATE)
        assert loaded is not None
        assert loaded.ids == [1, 2]
        assert len(await repo.list()) == 1

    @pytest.mark.asyncio
    async def test_ids_are_stored_as_json(self, repo, session):
        await repo.save(DirtyRecord(class_name="Page", type=OperationType.DELETE, ids=[7, 3]))

        result = await session.execute(dirty_classes_table.select())
        row = result.mappings().one()
        assert row["ids"] == "[7, 3]"
        assert row["type"] == "delete"

    @pytest.mark.asyncio
    async def test_list_filters_by_type(self, repo):
        await repo.save(DirtyRecord(class_name="Page", type=OperationType.UPDATE, ids=[1]))
        await repo.save(DirtyRecord(class_name="Page", type=OperationType.DELETE, ids=[2]))

        records = await repo.list(OperationType.DELETE)

        assert [(r.class_name, r.type, r.ids) for r in records] == [
            ("Page", OperationType.DELETE, [2])
        ]

    @pytest.mark.asyncio
    async def test_get_malformed_raises(self, repo, session):
        await _insert_raw(session, "Page", "update", "not json")

        with pytest.raises(MalformedDirtyRecordError):
            await repo.get("Page", OperationType.UPDATE)

    @pytest.mark.asyncio
    async def test_list_skips_malformed_rows(self, repo, session):
        await _insert_raw(session, "Page", "update", "[1,")
        await repo.save(DirtyRecord(class_name="File", type=OperationType.UPDATE, ids=[5]))

        records = await repo.list()

        assert [r.class_name for r in records] == ["File"]

    @pytest.mark.asyncio
    async def test_store_fails_open_on_malformed_row(self, repo, session):
        """The store resets an unparseable row to an empty list."""
        await _insert_raw(session, "Page", "update", "[1,")
        store = DirtyRecordStore(repo=repo)

        assert await store.ids("Page", OperationType.UPDATE) == []

        loaded = await repo.get("Page", OperationType.UPDATE)
        assert loaded is not None
        assert loaded.ids == []
