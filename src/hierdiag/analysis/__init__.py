"""Relation, closure, minimalization and join analysis for hierarchies."""

from .closure import compose_witness, transitive_closure
from .joins import Join, find_joins
from .minimal import is_minimal, minimalize
from .relation import Relation, Triple

__all__ = [
    "Join",
    "Relation",
    "Triple",
    "compose_witness",
    "find_joins",
    "is_minimal",
    "minimalize",
    "transitive_closure",
]
