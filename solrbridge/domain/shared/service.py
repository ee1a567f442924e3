"""Base class for domain services."""

from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform()
class _ServiceMeta(type):
    """Turns every Service subclass into a dataclass.

    Collaborators are declared as annotated class attributes and injected
    through the generated ``__init__``.
    """

    def __new__(mcs, name: str, bases: tuple, namespace: dict):
        cls = super().__new__(mcs, name, bases, namespace)
        return dataclass(cls) if bases else cls


class Service(metaclass=_ServiceMeta):
    """Base class for domain services."""
