from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from hierdiag.analysis.minimal import minimalize
from hierdiag.analysis.relation import Relation
from hierdiag.exceptions import AmbiguousJoin


@dataclass(frozen=True)
class Join:
    left: str
    right: str
    join: str


def common_successors(closure: Relation, left: str, right: str) -> dict[str, None]:
    """Entities reachable from both sides, each side counting as reachable from itself."""
    left_reach = set(closure.targets(left)) | {left}
    right_reach = set(closure.targets(right)) | {right}
    return {entity: None for entity in sorted(left_reach & right_reach)}


def find_joins(closure: Relation, entities: Iterable[str] | None = None) -> list[Join]:
    """Compute the least common successor of every ordered pair of entities.

    Pairs without a common successor are skipped. A pair with more than one
    minimal common successor raises :class:`AmbiguousJoin`.
    """
    names = sorted(closure.entities() if entities is None else entities)
    joins: list[Join] = []
    for left in names:
        for right in names:
            if left == right:
                continue
            minimal = minimalize(closure, common_successors(closure, left, right))
            if not minimal:
                continue
            if len(minimal) > 1:
                raise AmbiguousJoin(left, right, tuple(minimal))
            (join,) = minimal
            joins.append(Join(left=left, right=right, join=join))
    return joins
