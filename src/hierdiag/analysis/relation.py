from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, NamedTuple

_EMPTY: Mapping[str, str] = MappingProxyType({})


class Triple(NamedTuple):
    """One raw ``(source, target, witness)`` edge as produced by a parser."""

    source: str
    target: str
    witness: str


@dataclass
class Relation:
    """Directed, edge-labelled graph over entity names.

    Every entity that appears as a target is also a key of ``edges``,
    possibly with an empty target mapping.
    """

    edges: dict[str, dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_triples(cls, triples: Iterable[tuple[str, str, str]]) -> "Relation":
        relation = cls()
        for source, target, witness in triples:
            relation.insert(source, target, witness)
        return relation

    def insert(self, source: str, target: str, witness: str) -> None:
        # A repeated (source, target) pair keeps the witness of the last call.
        self.edges.setdefault(source, {})[target] = witness
        self.edges.setdefault(target, {})

    def entities(self) -> Iterator[str]:
        return iter(self.edges)

    def targets(self, entity: str) -> Mapping[str, str]:
        targets = self.edges.get(entity)
        if targets is None:
            return _EMPTY
        return MappingProxyType(targets)

    def targets_or_none(self, entity: str) -> Mapping[str, str] | None:
        targets = self.edges.get(entity)
        if targets is None:
            return None
        return MappingProxyType(targets)

    def witness(self, source: str, target: str) -> str | None:
        return self.edges.get(source, {}).get(target)

    def has_edge(self, source: str, target: str) -> bool:
        return target in self.edges.get(source, {})

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.edges.values())

    def copy(self) -> "Relation":
        return Relation({source: dict(targets) for source, targets in self.edges.items()})

    def as_dict(self) -> dict[str, dict[str, str]]:
        return {source: dict(targets) for source, targets in self.edges.items()}

    def __contains__(self, entity: object) -> bool:
        return entity in self.edges

    def __len__(self) -> int:
        return len(self.edges)
