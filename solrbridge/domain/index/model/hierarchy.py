"""Class hierarchy resolution for index applicability."""

import logging

logger = logging.getLogger(__name__)


class ClassHierarchy:
    """Resolves a class name to itself plus all of its ancestors.

    Built from a ``{class: parent}`` map. Ancestor sets are computed by an
    iterative walk and memoized per class.
    """

    def __init__(self, parents: dict[str, str | None] | None = None) -> None:
        self._parents = dict(parents or {})
        self._cache: dict[str, tuple[str, ...]] = {}

    def ancestors(self, class_name: str) -> tuple[str, ...]:
        """Return ``class_name`` followed by its ancestors, nearest first."""
        cached = self._cache.get(class_name)
        if cached is not None:
            return cached

        chain = [class_name]
        parent = self._parents.get(class_name)
        while parent is not None:
            if parent in chain:
                logger.warning(f"Cycle in class hierarchy at '{parent}' (from '{class_name}')")
                break
            chain.append(parent)
            parent = self._parents.get(parent)

        resolved = tuple(chain)
        self._cache[class_name] = resolved
        return resolved

    def base_class(self, class_name: str) -> str:
        """The root-most ancestor of ``class_name``."""
        return self.ancestors(class_name)[-1]

    def intersects(self, class_name: str, classes: list[str]) -> bool:
        return not set(self.ancestors(class_name)).isdisjoint(classes)
