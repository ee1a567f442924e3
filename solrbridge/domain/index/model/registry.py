"""Index registry - the enabled index definitions, by name."""

from collections.abc import Iterator

from solrbridge.domain.index.model.definition import IndexDefinition
from solrbridge.domain.shared.error import UnknownIndexError


class IndexRegistry:
    """Registry of enabled index definitions."""

    def __init__(self, indexes: dict[str, IndexDefinition]) -> None:
        self._indexes = indexes

    def get(self, name: str) -> IndexDefinition | None:
        """Get an index by name."""
        return self._indexes.get(name)

    def require(self, name: str) -> IndexDefinition:
        """Get an index by name, raising UnknownIndexError if it is not configured."""
        index = self._indexes.get(name)
        if index is None:
            raise UnknownIndexError(name, available=self.names())
        return index

    def resolve(self, name: str | None = None) -> list[IndexDefinition]:
        """Candidate indexes for an operation: the named one, or all of them."""
        if name is None:
            return list(self._indexes.values())
        return [self.require(name)]

    def __contains__(self, name: str) -> bool:
        return name in self._indexes

    def __iter__(self) -> Iterator[str]:
        return iter(self._indexes)

    def __len__(self) -> int:
        return len(self._indexes)

    def names(self) -> list[str]:
        """List all available index names."""
        return list(self._indexes.keys())

    def items(self) -> Iterator[tuple[str, IndexDefinition]]:
        return iter(self._indexes.items())
