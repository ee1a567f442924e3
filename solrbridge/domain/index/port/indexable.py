from __future__ import annotations

from typing import Any, Protocol


class Indexable(Protocol):
    """An object from the object store that can be pushed to Solr.

    ``show_in_search`` is ``None`` when the object has no visibility flag;
    only an explicit ``False`` removes it from the index.
    """

    @property
    def id(self) -> int: ...

    @property
    def class_name(self) -> str: ...

    @property
    def show_in_search(self) -> bool | None: ...

    @property
    def versioned(self) -> bool: ...

    def field_value(self, path: str) -> Any:
        """Resolve a dotted field path, reading under the current reading stage."""
        ...
