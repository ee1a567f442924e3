"""ObjectSnapshot - a plain, detached Indexable."""

from typing import Any

from pydantic import BaseModel, Field

from solrbridge.domain.shared.versioning import Stage, current_stage


class ObjectSnapshot(BaseModel):
    """Field values of an object, captured per reading stage.

    Unversioned objects only carry ``fields``. Versioned objects may carry
    ``live_fields`` too, which are used while the reading stage is LIVE.
    """

    id: int
    class_name: str
    show_in_search: bool | None = None
    versioned: bool = False
    fields: dict[str, Any] = Field(default_factory=dict)
    live_fields: dict[str, Any] | None = None

    def field_value(self, path: str) -> Any:
        source = self.fields
        if self.versioned and self.live_fields is not None and current_stage() is Stage.LIVE:
            source = self.live_fields
        return _resolve_path(source, path)


def _resolve_path(data: Any, path: str) -> Any:
    value = data
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get(part)
        elif isinstance(value, list):
            value = [_resolve_path(item, part) for item in value]
        else:
            value = getattr(value, part, None)
    return value
