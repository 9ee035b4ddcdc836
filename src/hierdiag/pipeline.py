from __future__ import annotations

from dataclasses import dataclass, field

from hierdiag.analysis.closure import transitive_closure
from hierdiag.analysis.joins import Join, find_joins
from hierdiag.analysis.relation import Relation, Triple
from hierdiag.render.diagram import (
    DiagramEdge,
    EdgeDisplay,
    EdgeKind,
    diagram_edges,
    minimal_edges,
)


@dataclass(frozen=True)
class HierarchyInput:
    """Raw edges of both kinds, in the order the prover printed them."""

    canonicals: tuple[Triple, ...] = ()
    coercions: tuple[Triple, ...] = ()

    def triples(self, kind: EdgeKind) -> tuple[Triple, ...]:
        if kind is EdgeKind.CANONICALS:
            return self.canonicals
        return self.coercions

    def closure(self, kind: EdgeKind) -> Relation:
        return transitive_closure(Relation.from_triples(self.triples(kind)))


@dataclass(frozen=True)
class EdgeKindReport:
    kind: EdgeKind
    closure: Relation
    minimal_edges: tuple[tuple[str, str, str], ...]
    joins: tuple[Join, ...] = field(default_factory=tuple)


def build_diagram(
    hierarchy: HierarchyInput,
    *,
    canonicals: EdgeDisplay,
    coercions: EdgeDisplay,
) -> list[DiagramEdge]:
    edges: list[DiagramEdge] = []
    for kind, display in (
        (EdgeKind.CANONICALS, canonicals),
        (EdgeKind.COERCIONS, coercions),
    ):
        if display.enabled:
            edges.extend(diagram_edges(hierarchy.closure(kind), kind=kind, display=display))
    return edges


def build_verification(hierarchy: HierarchyInput) -> list[Join]:
    """Joins of the canonical-projection hierarchy; coercions are not verified."""
    return find_joins(hierarchy.closure(EdgeKind.CANONICALS))


def build_report(hierarchy: HierarchyInput) -> list[EdgeKindReport]:
    reports: list[EdgeKindReport] = []
    for kind in EdgeKind:
        closure = hierarchy.closure(kind)
        joins = find_joins(closure) if kind is EdgeKind.CANONICALS else []
        reports.append(
            EdgeKindReport(
                kind=kind,
                closure=closure,
                minimal_edges=tuple(minimal_edges(closure)),
                joins=tuple(joins),
            )
        )
    return reports
