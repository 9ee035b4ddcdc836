from __future__ import annotations

from hierdiag.analysis.closure import compose_witness, transitive_closure
from hierdiag.analysis.relation import Relation

_LATTICE = [
    ("Zmodule", "Ring", "Ring.base"),
    ("Ring", "ComRing", "ComRing.base"),
    ("Ring", "UnitRing", "UnitRing.base"),
    ("ComRing", "ComUnitRing", "ComUnitRing.base"),
    ("UnitRing", "ComUnitRing", "ComUnitRing.base2"),
    ("ComUnitRing", "IntegralDomain", "IntegralDomain.base"),
    ("IntegralDomain", "Field", "Field.base"),
]


def test_closure_composes_witnesses_along_paths(closure_of) -> None:
    closure = closure_of(("A", "B", "w1"), ("B", "C", "w2"))
    assert closure.witness("A", "C") == "w1; w2"
    assert compose_witness("w1", "w2") == "w1; w2"


def test_closure_keeps_direct_witness(closure_of) -> None:
    closure = closure_of(
        ("A", "B", "ab"),
        ("B", "C", "bc"),
        ("A", "C", "direct"),
    )
    assert closure.witness("A", "C") == "direct"


def test_direct_witness_wins_regardless_of_insertion_order(closure_of) -> None:
    forward = closure_of(("A", "C", "direct"), ("A", "B", "ab"), ("B", "C", "bc"))
    backward = closure_of(("B", "C", "bc"), ("A", "B", "ab"), ("A", "C", "direct"))
    assert forward.witness("A", "C") == backward.witness("A", "C") == "direct"


def test_closure_is_transitive(closure_of) -> None:
    closure = closure_of(*_LATTICE)
    for i in closure.entities():
        for j in closure.targets(i):
            for k in closure.targets(j):
                if k != i:
                    assert closure.has_edge(i, k), (i, j, k)
    assert closure.has_edge("Zmodule", "Field")


def test_closure_is_idempotent(closure_of) -> None:
    closure = closure_of(*_LATTICE)
    assert transitive_closure(closure).as_dict() == closure.as_dict()


def test_closure_does_not_mutate_input() -> None:
    relation = Relation.from_triples([("A", "B", "w1"), ("B", "C", "w2")])
    before = relation.as_dict()
    transitive_closure(relation)
    assert relation.as_dict() == before


def test_sink_entities_are_left_unchanged(closure_of) -> None:
    closure = closure_of(("A", "B", "w1"), ("C", "B", "w2"))
    assert dict(closure.targets("B")) == {}
    assert dict(closure.targets("A")) == {"B": "w1"}


def test_long_chain_witness_concatenates_every_hop(closure_of) -> None:
    closure = closure_of(("A", "B", "1"), ("B", "C", "2"), ("C", "D", "3"))
    assert closure.witness("A", "D") == "1; 2; 3"
