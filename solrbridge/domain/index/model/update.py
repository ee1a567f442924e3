"""Update commands sent to a Solr core."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from solrbridge.domain.shared.model.value import ValueObject


class OperationType(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    DELETE_ALL = "deleteall"


class UpdateCommand(BaseModel):
    """A single mutation of a core: documents to add or keys/query to delete.

    ``commit`` is sent in the same request as the mutation.
    """

    add: list[dict[str, Any]] = Field(default_factory=list)
    delete_ids: list[str] = Field(default_factory=list)
    delete_query: str | None = None
    commit: bool = True


class UpdateResult(ValueObject):
    """Outcome of an update as reported by Solr's responseHeader."""

    core: str
    status: int
    query_time: int = 0
