from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from hierdiag.config import (
    hierarchy_defaults,
    hierarchy_libs,
    hierarchy_load_paths,
    hierarchy_text,
    hierarchy_timeout,
    load_config,
    merge_payload,
    parse_load_path,
)


def test_hierarchy_defaults_reads_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "hierdiag.toml"
    config_path.write_text(
        textwrap.dedent(
            """
            [hierarchy]
            libs = ["ssreflect", "ssralg, ssrnum"]
            load_paths = ["theories=mathcomp"]
            canonicals = "red"
            coercions = "off"
            coqbin = "/opt/coq/bin"
            timeout = 30
            """
        ).strip()
        + "\n"
    )
    section = hierarchy_defaults(root=tmp_path)
    assert hierarchy_libs(section) == ["ssreflect", "ssralg", "ssrnum"]
    assert hierarchy_load_paths(section) == ["theories=mathcomp"]
    assert hierarchy_text(section, "canonicals") == "red"
    assert hierarchy_text(section, "coqbin") == "/opt/coq/bin"
    assert hierarchy_timeout(section) == 30.0


def test_missing_or_malformed_config_is_empty(tmp_path: Path) -> None:
    assert load_config(root=tmp_path) == {}
    broken = tmp_path / "broken.toml"
    broken.write_text("[hierarchy\nlibs = ", encoding="utf-8")
    assert hierarchy_defaults(config_path=broken) == {}


def test_section_helpers_tolerate_bad_values() -> None:
    section = {"libs": 3, "load_paths": "a=b", "timeout": True, "coqbin": "  "}
    assert hierarchy_libs(section) == []
    assert hierarchy_load_paths(section) == ["a=b"]
    assert hierarchy_timeout(section) is None
    assert hierarchy_text(section, "coqbin") is None
    assert hierarchy_libs(None) == []


def test_merge_payload_prefers_explicit_values() -> None:
    merged = merge_payload(
        {"libs": ["ssralg"], "coqbin": None},
        {"libs": ["all.all"], "coqbin": "/coq"},
    )
    assert merged == {"libs": ["ssralg"], "coqbin": "/coq"}


def test_parse_load_path() -> None:
    assert parse_load_path("theories = mathcomp") == ("theories", "mathcomp")
    for bad in ("theories", "=mathcomp", "theories="):
        with pytest.raises(ValueError):
            parse_load_path(bad)
