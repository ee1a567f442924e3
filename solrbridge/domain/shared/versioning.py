"""Reading stage and indexing suppression scopes.

Both values live in ContextVars, so every asyncio task and thread sees its
own copy. A scope change in one request never leaks into another.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from enum import StrEnum


class Stage(StrEnum):
    """Which version of versioned content is read."""

    DRAFT = "Stage"
    LIVE = "Live"


_stage: ContextVar[Stage] = ContextVar("reading_stage", default=Stage.DRAFT)
_suppressed: ContextVar[bool] = ContextVar("indexing_suppressed", default=False)


def current_stage() -> Stage:
    """Return the reading stage of the current context."""
    return _stage.get()


@contextmanager
def reading_stage(stage: Stage) -> Iterator[Stage]:
    """Read content under ``stage`` for the duration of the block.

    The previous stage is restored on every exit path.
    """
    token = _stage.set(stage)
    try:
        yield stage
    finally:
        _stage.reset(token)


def indexing_suppressed() -> bool:
    return _suppressed.get()


@contextmanager
def suppress_indexing() -> Iterator[None]:
    """Stop change hooks from pushing to Solr, e.g. during a bulk rebuild."""
    token = _suppressed.set(True)
    try:
        yield
    finally:
        _suppressed.reset(token)
