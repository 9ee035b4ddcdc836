from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest

from hierdiag.analysis.closure import transitive_closure
from hierdiag.analysis.relation import Relation


@pytest.fixture
def closure_of():
    def _close(*triples: tuple[str, str, str]) -> Relation:
        return transitive_closure(Relation.from_triples(triples))

    return _close


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch):
    for name in ("COQBIN", "HIERDIAG_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
    yield
