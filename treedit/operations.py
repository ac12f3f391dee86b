"""
Operation dataclasses for tree edit scripts.

Four elementary operations: Remove, Insert, Update, Match.
The source vertex belongs to the first tree, the target to the second.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

V = TypeVar("V")


class OperationType(Enum):
    REMOVE = "remove"
    INSERT = "insert"
    UPDATE = "update"
    MATCH = "match"


@dataclass(frozen=True)
class Operation(Generic[V]):
    """One step of an edit script. The unused side is None."""

    type: OperationType
    source: V | None = None
    target: V | None = None

    @classmethod
    def remove(cls, source: V) -> "Operation[V]":
        return cls(OperationType.REMOVE, source, None)

    @classmethod
    def insert(cls, target: V) -> "Operation[V]":
        return cls(OperationType.INSERT, None, target)

    @classmethod
    def update(cls, source: V, target: V) -> "Operation[V]":
        return cls(OperationType.UPDATE, source, target)

    @classmethod
    def match(cls, source: V, target: V) -> "Operation[V]":
        return cls(OperationType.MATCH, source, target)

    def __str__(self) -> str:
        match self.type:
            case OperationType.REMOVE:
                return f"Remove({self.source})"
            case OperationType.INSERT:
                return f"Insert({self.target})"
            case OperationType.UPDATE:
                return f"Update({self.source} -> {self.target})"
            case OperationType.MATCH:
                return f"Match({self.source} -> {self.target})"
