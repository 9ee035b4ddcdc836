from __future__ import annotations

from hierdiag.analysis.relation import Relation

WITNESS_SEPARATOR = "; "


def compose_witness(left: str, right: str) -> str:
    return f"{left}{WITNESS_SEPARATOR}{right}"


def transitive_closure(relation: Relation) -> Relation:
    """Floyd-Warshall transitive closure with witness composition.

    For each intermediate ``j`` and each ``i`` with ``i -> j``, every
    ``j -> k`` missing from ``i`` is added with the composed witness
    ``"<i->j>; <j->k>"``. Edges already present are never replaced, so a
    direct witness always wins over a composed one. The input is left
    untouched.
    """
    closed = relation.copy()
    for j in sorted(closed.entities()):
        # Snapshot: additions made while j is the intermediate must not feed back into j.
        through = dict(closed.edges.get(j, {}))
        if not through:
            continue
        for i in sorted(closed.entities()):
            targets = closed.edges[i]
            i_j = targets.get(j)
            if i_j is None:
                continue
            for k, j_k in through.items():
                if k not in targets:
                    targets[k] = compose_witness(i_j, j_k)
    return closed
