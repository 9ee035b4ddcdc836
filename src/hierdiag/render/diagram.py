from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from hierdiag.analysis.minimal import minimalize
from hierdiag.analysis.relation import Relation

DEFAULT_GRAPH_NAME = "structures"


class EdgeKind(str, Enum):
    CANONICALS = "canonicals"
    COERCIONS = "coercions"


class DisplayMode(str, Enum):
    OFF = "off"
    ON = "on"
    COLOR = "color"


@dataclass(frozen=True)
class EdgeDisplay:
    """How one kind of edge is drawn: hidden, plain, or in a colour."""

    mode: DisplayMode
    color: str | None = None

    @classmethod
    def parse(cls, value: str) -> "EdgeDisplay":
        text = value.strip()
        if not text:
            raise ValueError("edge display must be 'off', 'on' or a colour name")
        if text == DisplayMode.OFF.value:
            return cls(DisplayMode.OFF)
        if text == DisplayMode.ON.value:
            return cls(DisplayMode.ON)
        return cls(DisplayMode.COLOR, text)

    @property
    def enabled(self) -> bool:
        return self.mode is not DisplayMode.OFF

    @property
    def attribute(self) -> str:
        if self.mode is DisplayMode.COLOR:
            return f"color={self.color}"
        return ""

    def __str__(self) -> str:
        if self.mode is DisplayMode.COLOR:
            return str(self.color)
        return self.mode.value


@dataclass(frozen=True)
class DiagramEdge:
    kind: EdgeKind
    source: str
    target: str
    witness: str
    attribute: str = ""


def minimal_edges(closure: Relation) -> list[tuple[str, str, str]]:
    """Non-redundant ``(source, target, witness)`` edges of a closure."""
    edges: list[tuple[str, str, str]] = []
    for source in sorted(closure.entities()):
        for target, witness in minimalize(closure, closure.targets(source)).items():
            edges.append((source, target, witness))
    return edges


def diagram_edges(
    closure: Relation,
    *,
    kind: EdgeKind,
    display: EdgeDisplay,
) -> list[DiagramEdge]:
    if not display.enabled:
        return []
    return [
        DiagramEdge(
            kind=kind,
            source=source,
            target=target,
            witness=witness,
            attribute=display.attribute,
        )
        for source, target, witness in minimal_edges(closure)
    ]


def _dot_quote(name: str) -> str:
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_dot(edges: Iterable[DiagramEdge], *, name: str = DEFAULT_GRAPH_NAME) -> str:
    lines = [f"digraph {name} {{"]
    for edge in edges:
        lines.append(
            f"{_dot_quote(edge.source)} -> {_dot_quote(edge.target)}[{edge.attribute}];"
        )
    lines.append("}")
    return "\n".join(lines) + "\n"
