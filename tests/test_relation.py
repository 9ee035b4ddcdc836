from __future__ import annotations

import pytest

from hierdiag.analysis.relation import Relation, Triple


def test_insert_registers_both_endpoints() -> None:
    relation = Relation()
    relation.insert("A", "B", "w")
    assert set(relation.entities()) == {"A", "B"}
    assert dict(relation.targets("A")) == {"B": "w"}
    assert dict(relation.targets("B")) == {}


def test_repeated_insert_keeps_last_witness() -> None:
    relation = Relation.from_triples([("A", "B", "first"), ("A", "B", "second")])
    assert relation.witness("A", "B") == "second"
    assert relation.edge_count() == 1


def test_entities_is_restartable() -> None:
    relation = Relation.from_triples([Triple("A", "B", "w"), Triple("B", "C", "v")])
    assert list(relation.entities()) == list(relation.entities()) == ["A", "B", "C"]


def test_targets_of_unknown_entity() -> None:
    relation = Relation.from_triples([("A", "B", "w")])
    assert dict(relation.targets("Z")) == {}
    assert relation.targets_or_none("Z") is None
    assert relation.targets_or_none("B") is not None


def test_targets_view_is_read_only() -> None:
    relation = Relation.from_triples([("A", "B", "w")])
    with pytest.raises(TypeError):
        relation.targets("A")["C"] = "x"  # type: ignore[index]


def test_copy_is_independent() -> None:
    relation = Relation.from_triples([("A", "B", "w")])
    copied = relation.copy()
    copied.insert("A", "C", "x")
    assert relation.as_dict() == {"A": {"B": "w"}, "B": {}}
    assert "C" in copied
    assert "C" not in relation
    assert len(copied) == 3
