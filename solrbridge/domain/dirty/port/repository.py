from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from solrbridge.domain.dirty.model.value import DirtyRecord
from solrbridge.domain.index.model.update import OperationType
from solrbridge.domain.shared.port import Port


class DirtyRecordRepository(Port, Protocol):
    @abstractmethod
    async def get(self, class_name: str, type: OperationType) -> DirtyRecord | None:
        """Load the record for ``(class_name, type)``.

        Raises:
            MalformedDirtyRecordError: The stored ID list cannot be parsed.
        """
        ...

    @abstractmethod
    async def save(self, record: DirtyRecord) -> None:
        """Insert or replace the record for its ``(class_name, type)`` key."""
        ...

    @abstractmethod
    async def list(self, type: OperationType | None = None) -> list[DirtyRecord]: ...
