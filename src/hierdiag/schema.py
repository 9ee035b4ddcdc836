from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel

from hierdiag.analysis.joins import Join
from hierdiag.analysis.relation import Triple
from hierdiag.pipeline import EdgeKindReport, HierarchyInput
from hierdiag.render.diagram import DiagramEdge


class TripleDTO(BaseModel):
    source: str
    target: str
    witness: str


class HierarchyInputDTO(BaseModel):
    canonicals: List[TripleDTO] = []
    coercions: List[TripleDTO] = []

    @classmethod
    def from_hierarchy(cls, hierarchy: HierarchyInput) -> "HierarchyInputDTO":
        return cls(
            canonicals=[TripleDTO(**triple._asdict()) for triple in hierarchy.canonicals],
            coercions=[TripleDTO(**triple._asdict()) for triple in hierarchy.coercions],
        )

    def to_hierarchy(self) -> HierarchyInput:
        return HierarchyInput(
            canonicals=tuple(
                Triple(item.source, item.target, item.witness) for item in self.canonicals
            ),
            coercions=tuple(
                Triple(item.source, item.target, item.witness) for item in self.coercions
            ),
        )


class DiagramEdgeDTO(BaseModel):
    kind: str
    source: str
    target: str
    witness: str
    attribute: str = ""

    @classmethod
    def from_edge(cls, edge: DiagramEdge) -> "DiagramEdgeDTO":
        return cls(
            kind=edge.kind.value,
            source=edge.source,
            target=edge.target,
            witness=edge.witness,
            attribute=edge.attribute,
        )


class JoinDTO(BaseModel):
    left: str
    right: str
    join: str

    @classmethod
    def from_join(cls, join: Join) -> "JoinDTO":
        return cls(left=join.left, right=join.right, join=join.join)


class EdgeKindReportDTO(BaseModel):
    kind: str
    entity_count: int
    edge_count: int
    closure: Dict[str, Dict[str, str]]
    minimal_edges: List[TripleDTO]
    joins: List[JoinDTO] = []

    @classmethod
    def from_report(cls, report: EdgeKindReport) -> "EdgeKindReportDTO":
        return cls(
            kind=report.kind.value,
            entity_count=len(report.closure),
            edge_count=report.closure.edge_count(),
            closure=report.closure.as_dict(),
            minimal_edges=[
                TripleDTO(source=source, target=target, witness=witness)
                for source, target, witness in report.minimal_edges
            ],
            joins=[JoinDTO.from_join(join) for join in report.joins],
        )


class HierarchyReportDTO(BaseModel):
    libs: List[str]
    kinds: List[EdgeKindReportDTO]
