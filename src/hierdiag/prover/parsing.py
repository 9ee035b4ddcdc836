from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from hierdiag.analysis.relation import Triple
from hierdiag.exceptions import ProverOutputError

# `Print Canonical Projections`: "To.sort <- From.sort ( Proj.name )"
_CANONICAL_RE = re.compile(
    r"^(?P<to>[^ ]+)\.sort <- (?P<from>[^ ]+)\.sort \( (?P<module>[^ ]+)\.(?P<name>[^. ]+) \)$"
)
# `Print Graph`: "[path] : Source.type >-> Target.type"
_COERCION_RE = re.compile(
    r"^\[(?P<path>[^]]+)\] : (?P<source>[^ ]+)\.type >-> (?P<target>[^ ]+)\.type$"
)


def parse_canonicals(lines: Iterable[str]) -> list[Triple]:
    """Canonical projections whose projection module is one of the endpoints.

    Each kept line yields ``(from, to, "Module.name")``.
    """
    triples: list[Triple] = []
    for line in lines:
        match = _CANONICAL_RE.match(line.rstrip("\r\n"))
        if match is None:
            continue
        module = match.group("module")
        if module not in (match.group("from"), match.group("to")):
            continue
        triples.append(
            Triple(match.group("from"), match.group("to"), f"{module}.{match.group('name')}")
        )
    return triples


def parse_coercions(lines: Iterable[str]) -> list[Triple]:
    """Coercion paths, oriented from the coercion target to its source."""
    triples: list[Triple] = []
    for line in lines:
        match = _COERCION_RE.match(line.rstrip("\r\n"))
        if match is None:
            continue
        triples.append(Triple(match.group("target"), match.group("source"), match.group("path")))
    return triples


def read_output(path: Path) -> list[str]:
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError as exc:
        raise ProverOutputError(path, "file was not produced") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ProverOutputError(path, str(exc)) from exc
