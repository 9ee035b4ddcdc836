from __future__ import annotations

import pytest

from hierdiag.render.diagram import (
    DiagramEdge,
    DisplayMode,
    EdgeDisplay,
    EdgeKind,
    diagram_edges,
    minimal_edges,
    render_dot,
)


def test_edge_display_parsing() -> None:
    assert EdgeDisplay.parse("off") == EdgeDisplay(DisplayMode.OFF)
    assert EdgeDisplay.parse("on") == EdgeDisplay(DisplayMode.ON)
    assert EdgeDisplay.parse("red") == EdgeDisplay(DisplayMode.COLOR, "red")
    with pytest.raises(ValueError):
        EdgeDisplay.parse("  ")


def test_edge_display_attribute() -> None:
    assert EdgeDisplay.parse("on").attribute == ""
    assert EdgeDisplay.parse("blue").attribute == "color=blue"
    assert not EdgeDisplay.parse("off").enabled
    assert str(EdgeDisplay.parse("blue")) == "blue"
    assert str(EdgeDisplay.parse("on")) == "on"


def test_minimal_edges_drop_transitive_shortcuts(closure_of) -> None:
    closure = closure_of(("A", "B", "ab"), ("B", "C", "bc"), ("A", "C", "ac"))
    assert minimal_edges(closure) == [("A", "B", "ab"), ("B", "C", "bc")]


def test_diagram_edges_carry_display_attribute(closure_of) -> None:
    closure = closure_of(("A", "B", "ab"))
    edges = diagram_edges(
        closure,
        kind=EdgeKind.COERCIONS,
        display=EdgeDisplay.parse("red"),
    )
    assert edges == [DiagramEdge(EdgeKind.COERCIONS, "A", "B", "ab", "color=red")]


def test_diagram_edges_off_is_empty(closure_of) -> None:
    closure = closure_of(("A", "B", "ab"))
    assert diagram_edges(closure, kind=EdgeKind.CANONICALS, display=EdgeDisplay.parse("off")) == []


def test_render_dot_brackets_edges() -> None:
    edges = [
        DiagramEdge(EdgeKind.CANONICALS, "A", "B", "ab"),
        DiagramEdge(EdgeKind.COERCIONS, "B", 'C"x', "bc", "color=red"),
    ]
    assert render_dot(edges) == (
        "digraph structures {\n"
        '"A" -> "B"[];\n'
        '"B" -> "C\\"x"[color=red];\n'
        "}\n"
    )


def test_render_dot_without_edges() -> None:
    assert render_dot([]) == "digraph structures {\n}\n"


def test_edge_display_keywords_are_case_sensitive() -> None:
    assert EdgeDisplay.parse("ON") == EdgeDisplay(DisplayMode.COLOR, "ON")
    assert EdgeDisplay.parse("Off").enabled
    assert EdgeDisplay.parse("Off").attribute == "color=Off"
