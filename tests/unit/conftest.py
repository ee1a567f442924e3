"""Shared fakes for unit tests."""

import pytest

from solrbridge.domain.dirty.model.value import DirtyRecord
from solrbridge.domain.index.model.update import OperationType, UpdateCommand, UpdateResult
from solrbridge.domain.shared.error import MalformedDirtyRecordError, RemoteSyncError
from solrbridge.domain.shared.versioning import Stage, current_stage


class FakeDirtyRecordRepository:
    """In-memory dirty record persistence keyed by (class_name, type)."""

    def __init__(self) -> None:
        self.rows: dict[tuple[str, str], list[int]] = {}
        self.malformed: set[tuple[str, str]] = set()
        self.saves = 0

    async def get(self, class_name: str, type: OperationType) -> DirtyRecord | None:
        key = (class_name, str(type))
        if key in self.malformed:
            raise MalformedDirtyRecordError(class_name, str(type), "[1, 2")
        if key not in self.rows:
            return None
        return DirtyRecord(class_name=class_name, type=type, ids=list(self.rows[key]))

    async def save(self, record: DirtyRecord) -> None:
        key = (record.class_name, str(record.type))
        self.malformed.discard(key)
        self.rows[key] = list(record.ids)
        self.saves += 1

    async def list(self, type: OperationType | None = None) -> list[DirtyRecord]:
        return [
            DirtyRecord(class_name=name, type=OperationType(t), ids=list(ids))
            for (name, t), ids in self.rows.items()
            if type is None or t == str(type)
        ]


class FakeSolrClient:
    """Records every update; fails them all when ``fail`` is set."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.updates: list[tuple[str, UpdateCommand]] = []
        self.stages: list[Stage] = []

    async def update(self, core: str, command: UpdateCommand) -> UpdateResult:
        self.updates.append((core, command))
        self.stages.append(current_stage())
        if self.fail:
            raise RemoteSyncError(core, "connection refused")
        return UpdateResult(core=core, status=0, query_time=1)

    async def select(self, query):
        raise NotImplementedError


@pytest.fixture
def dirty_repo() -> FakeDirtyRecordRepository:
    return FakeDirtyRecordRepository()


@pytest.fixture
def solr_client() -> FakeSolrClient:
    return FakeSolrClient()
