from __future__ import annotations

from typing import Mapping, TypeVar

from hierdiag.analysis.relation import Relation

V = TypeVar("V")


def minimalize(closure: Relation, mapping: Mapping[str, V]) -> dict[str, V]:
    """Drop every key of ``mapping`` reachable from another surviving key.

    ``closure`` must be transitively closed. Keys are visited in sorted
    order; a key already dropped is not used to drop others, a key without
    a closure entry drops nothing, and a key never drops itself. Marker
    values are carried through unchanged.
    """
    keys = sorted(mapping)
    removed: set[str] = set()
    for key in keys:
        if key in removed:
            continue
        reachable = closure.targets_or_none(key)
        if reachable is None:
            continue
        for target in reachable:
            if target != key and target in mapping:
                removed.add(target)
    return {key: mapping[key] for key in keys if key not in removed}


def is_minimal(closure: Relation, mapping: Mapping[str, object]) -> bool:
    return all(
        not closure.has_edge(source, target)
        for source in mapping
        for target in mapping
        if source != target
    )
