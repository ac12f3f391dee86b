"""
Cost models for tree edit scripts.

A cost model is three caller-supplied functions, each returning a
non-negative integer:

    remove(v)    - cost of deleting vertex v of the first tree
    insert(w)    - cost of inserting vertex w of the second tree
    update(v, w) - cost of relabeling v into w

The default model charges 1 per removal and insertion, and 0 or 1 for an
update depending on whether the two vertices compare equal.
"""

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from numbers import Integral
from typing import Any, Generic, TypeVar

from .constants import MAX_COST
from .errors import CostOverflowError, MissingArgumentError, NegativeCostError
from .operations import Operation, OperationType

V1 = TypeVar("V1")
V2 = TypeVar("V2")


def unit_cost(vertex: Any) -> int:
    return 1


def equality_cost(source: Any, target: Any) -> int:
    return 0 if source == target else 1


def checked_cost(value: Any, what: str) -> int:
    """Validates the value returned by a cost function."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"{what} must be an integer, got {value!r}")
    if value < 0:
        raise NegativeCostError(f"{what} must be non-negative, got {value}")
    if value > MAX_COST:
        raise CostOverflowError(f"{what} must be at most 2**61, got {value}")
    return int(value)


@dataclass(frozen=True)
class CostModel(Generic[V1, V2]):
    remove: Callable[[V1], int] = unit_cost
    insert: Callable[[V2], int] = unit_cost
    update: Callable[[V1, V2], int] = equality_cost

    def __post_init__(self):
        for name in ("remove", "insert", "update"):
            if getattr(self, name) is None:
                raise MissingArgumentError(f"{name} cost function cannot be None")

    def swapped(self) -> "CostModel[V2, V1]":
        """The model of the reverse transformation, second tree to first."""
        update = self.update
        return CostModel(
            remove=self.insert,
            insert=self.remove,
            update=lambda target, source: update(source, target),
        )

    @classmethod
    def from_labels(
        cls,
        label1: Callable[[V1], Hashable],
        label2: Callable[[V2], Hashable] | None = None,
    ) -> "CostModel[V1, V2]":
        """
        Unit costs where an update is free iff both labels are equal.

        Useful when vertices are identities and several vertices carry the
        same label.
        """
        second = label2 if label2 is not None else label1
        return cls(
            update=lambda source, target: 0 if label1(source) == second(target) else 1
        )

    def cost_of(self, operation: Operation) -> int:
        """Elementary cost of one operation of a script."""
        match operation.type:
            case OperationType.REMOVE:
                return checked_cost(self.remove(operation.source), "remove cost")
            case OperationType.INSERT:
                return checked_cost(self.insert(operation.target), "insert cost")
            case OperationType.UPDATE | OperationType.MATCH:
                return checked_cost(
                    self.update(operation.source, operation.target), "update cost"
                )


UNIT_COSTS: CostModel[Any, Any] = CostModel()


def script_cost(script: Iterable[Operation], costs: CostModel = UNIT_COSTS) -> int:
    """Sums the elementary costs along an edit script."""
    return sum(costs.cost_of(operation) for operation in script)
