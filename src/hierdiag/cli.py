from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Mapping, Optional
import json

import typer
from pydantic import ValidationError

from hierdiag.config import (
    hierarchy_defaults,
    hierarchy_libs,
    hierarchy_load_paths,
    hierarchy_text,
    hierarchy_timeout,
    merge_payload,
    parse_load_path,
)
from hierdiag.exceptions import AmbiguousJoin, HierarchyError, HierarchyInputError
from hierdiag.pipeline import HierarchyInput, build_diagram, build_report, build_verification
from hierdiag.prover.coqtop import DEFAULT_LIBS, CoqtopRequest, collect_hierarchy
from hierdiag.render.diagram import EdgeDisplay, render_dot
from hierdiag.render.verifier import render_verifier
from hierdiag.runtime.env_policy import env_flag
from hierdiag.schema import (
    DiagramEdgeDTO,
    EdgeKindReportDTO,
    HierarchyInputDTO,
    HierarchyReportDTO,
)

app = typer.Typer(
    add_completion=False,
    help=(
        "Draw and verify the hierarchy of mathematical structures from the "
        "coercions and canonical projections known to coqtop. Edges implied "
        "by transitivity are removed for each kind of edge."
    ),
)

CollectHierarchy = Callable[..., HierarchyInput]

_STDOUT_ALIAS = "-"
_VERBOSE_ENV = "HIERDIAG_VERBOSE"
_DEFAULT_CANONICALS = "on"
_DEFAULT_COERCIONS = "off"
_EXIT_FAILURE = 2
_EXIT_AMBIGUOUS_JOIN = 3
_OUTPUT_FORMATS = ("dot", "json")


@dataclass(frozen=True)
class HierarchyOptions:
    libs: tuple[str, ...]
    load_paths: tuple[tuple[str, str], ...]
    coqbin: str | None
    timeout: float | None
    triples: Path | None
    verbose: bool

    def request(self) -> CoqtopRequest:
        return CoqtopRequest(
            libs=self.libs,
            load_paths=self.load_paths,
            coqbin=self.coqbin,
            timeout=self.timeout,
        )


def _lib_option():
    return typer.Option(
        [],
        "--lib",
        help="Library imported with `From mathcomp Require Import` (repeatable, default all.all).",
    )


def _load_path_option():
    return typer.Option(
        [],
        "--load-path",
        "-R",
        help="Recursively map physical DIR to logical COQDIR, given as DIR=COQDIR (repeatable).",
    )


def _coqbin_option():
    return typer.Option(None, "--coqbin", help="Directory holding coqtop (default: $COQBIN).")


def _timeout_option():
    return typer.Option(None, "--timeout", help="Seconds to wait for coqtop.")


def _triples_option():
    return typer.Option(
        None,
        "--triples",
        help="Read a hierarchy written by `hierdiag collect` instead of running coqtop.",
    )


def _output_option():
    return typer.Option(None, "--output", "-o", help="Write to this file instead of stdout.")


def _config_option():
    return typer.Option(None, "--config", help="Configuration file (default: ./hierdiag.toml).")


def _verbose_option():
    return typer.Option(False, "--verbose", "-v", help="Report progress on stderr.")


def _note_fn(verbose: bool) -> Callable[[str], None] | None:
    if not verbose:
        return None

    def _note(message: str) -> None:
        typer.secho(message, err=True, fg=typer.colors.BLUE)

    return _note


def _resolve_options(
    *,
    config: Optional[Path],
    lib: List[str],
    load_path: List[str],
    coqbin: Optional[str],
    timeout: Optional[float],
    triples: Optional[Path],
    verbose: bool,
) -> HierarchyOptions:
    section = hierarchy_defaults(config_path=config)
    merged = merge_payload(
        {
            "libs": list(lib) or None,
            "load_paths": list(load_path) or None,
            "coqbin": coqbin,
            "timeout": timeout,
        },
        section,
    )
    try:
        load_paths = tuple(parse_load_path(entry) for entry in hierarchy_load_paths(merged))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--load-path") from exc
    return HierarchyOptions(
        libs=tuple(hierarchy_libs(merged) or DEFAULT_LIBS),
        load_paths=load_paths,
        coqbin=hierarchy_text(merged, "coqbin"),
        timeout=hierarchy_timeout(merged),
        triples=triples,
        verbose=verbose or env_flag(_VERBOSE_ENV),
    )


def _context_collect_hierarchy(ctx: typer.Context) -> CollectHierarchy:
    obj = ctx.obj
    if isinstance(obj, Mapping):
        candidate = obj.get("collect_hierarchy")
        if callable(candidate):
            return candidate
    return collect_hierarchy


def load_triples(path: Path) -> HierarchyInput:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise HierarchyInputError(f"Cannot read {path}: {exc}") from exc
    try:
        return HierarchyInputDTO.model_validate_json(raw).to_hierarchy()
    except ValidationError as exc:
        raise HierarchyInputError(f"Invalid hierarchy payload in {path}: {exc}") from exc


def _load_hierarchy(ctx: typer.Context, options: HierarchyOptions) -> HierarchyInput:
    note = _note_fn(options.verbose)
    if options.triples is not None:
        if note is not None:
            note(f"reading hierarchy from {options.triples}")
        return load_triples(options.triples)
    collect_fn = _context_collect_hierarchy(ctx)
    return collect_fn(options.request(), note=note)


def _write_text_to_target(target: Path | None, payload: str) -> None:
    if target is None or str(target) == _STDOUT_ALIAS:
        typer.echo(payload, nl=False)
        return
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(payload, encoding="utf-8")


@contextmanager
def _hierarchy_errors() -> Iterator[None]:
    try:
        yield
    except AmbiguousJoin as exc:
        typer.secho(str(exc), err=True, fg=typer.colors.RED)
        raise typer.Exit(code=_EXIT_AMBIGUOUS_JOIN) from exc
    except HierarchyError as exc:
        typer.secho(str(exc), err=True, fg=typer.colors.RED)
        raise typer.Exit(code=_EXIT_FAILURE) from exc


def _edge_display(value: str, *, param_hint: str) -> EdgeDisplay:
    try:
        return EdgeDisplay.parse(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=param_hint) from exc


@app.command("diagram")
def diagram(
    ctx: typer.Context,
    canonicals: Optional[str] = typer.Option(
        None,
        "--canonicals",
        help="Edges of canonical projections: off, on or a colour (default: on).",
    ),
    coercions: Optional[str] = typer.Option(
        None,
        "--coercions",
        help="Edges of coercions: off, on or a colour (default: off).",
    ),
    output_format: str = typer.Option("dot", "--format", help="Output format: dot or json."),
    lib: List[str] = _lib_option(),
    load_path: List[str] = _load_path_option(),
    coqbin: Optional[str] = _coqbin_option(),
    timeout: Optional[float] = _timeout_option(),
    triples: Optional[Path] = _triples_option(),
    output: Optional[Path] = _output_option(),
    config: Optional[Path] = _config_option(),
    verbose: bool = _verbose_option(),
) -> None:
    """Draw the minimal hierarchy diagram in the DOT format."""
    if output_format not in _OUTPUT_FORMATS:
        raise typer.BadParameter(
            f"expected one of {', '.join(_OUTPUT_FORMATS)}", param_hint="--format"
        )
    section = hierarchy_defaults(config_path=config)
    canonicals_display = _edge_display(
        canonicals or hierarchy_text(section, "canonicals") or _DEFAULT_CANONICALS,
        param_hint="--canonicals",
    )
    coercions_display = _edge_display(
        coercions or hierarchy_text(section, "coercions") or _DEFAULT_COERCIONS,
        param_hint="--coercions",
    )
    if (
        canonicals_display.enabled
        and coercions_display.enabled
        and str(canonicals_display) == str(coercions_display)
    ):
        raise typer.BadParameter(
            "canonical projections and coercions must be drawn differently",
            param_hint="--coercions",
        )
    options = _resolve_options(
        config=config,
        lib=lib,
        load_path=load_path,
        coqbin=coqbin,
        timeout=timeout,
        triples=triples,
        verbose=verbose,
    )
    with _hierarchy_errors():
        hierarchy = _load_hierarchy(ctx, options)
        edges = build_diagram(
            hierarchy,
            canonicals=canonicals_display,
            coercions=coercions_display,
        )
    if output_format == "json":
        payload = json.dumps(
            [DiagramEdgeDTO.from_edge(edge).model_dump() for edge in edges],
            indent=2,
            sort_keys=True,
        )
        _write_text_to_target(output, payload + "\n")
        return
    _write_text_to_target(output, render_dot(edges))


@app.command("verify")
def verify(
    ctx: typer.Context,
    lib: List[str] = _lib_option(),
    load_path: List[str] = _load_path_option(),
    coqbin: Optional[str] = _coqbin_option(),
    timeout: Optional[float] = _timeout_option(),
    triples: Optional[Path] = _triples_option(),
    output: Optional[Path] = _output_option(),
    config: Optional[Path] = _config_option(),
    verbose: bool = _verbose_option(),
) -> None:
    """Output a proof script verifying the join of every pair of structures."""
    options = _resolve_options(
        config=config,
        lib=lib,
        load_path=load_path,
        coqbin=coqbin,
        timeout=timeout,
        triples=triples,
        verbose=verbose,
    )
    with _hierarchy_errors():
        hierarchy = _load_hierarchy(ctx, options)
        joins = build_verification(hierarchy)
    note = _note_fn(options.verbose)
    if note is not None:
        note(f"verifying {len(joins)} joins")
    _write_text_to_target(output, render_verifier(joins, libs=options.libs))


@app.command("collect")
def collect(
    ctx: typer.Context,
    lib: List[str] = _lib_option(),
    load_path: List[str] = _load_path_option(),
    coqbin: Optional[str] = _coqbin_option(),
    timeout: Optional[float] = _timeout_option(),
    output: Optional[Path] = _output_option(),
    config: Optional[Path] = _config_option(),
    verbose: bool = _verbose_option(),
) -> None:
    """Run coqtop once and save the collected edges as JSON for --triples."""
    options = _resolve_options(
        config=config,
        lib=lib,
        load_path=load_path,
        coqbin=coqbin,
        timeout=timeout,
        triples=None,
        verbose=verbose,
    )
    with _hierarchy_errors():
        hierarchy = _load_hierarchy(ctx, options)
    payload = HierarchyInputDTO.from_hierarchy(hierarchy).model_dump()
    _write_text_to_target(output, json.dumps(payload, indent=2, sort_keys=True) + "\n")


@app.command("report")
def report(
    ctx: typer.Context,
    lib: List[str] = _lib_option(),
    load_path: List[str] = _load_path_option(),
    coqbin: Optional[str] = _coqbin_option(),
    timeout: Optional[float] = _timeout_option(),
    triples: Optional[Path] = _triples_option(),
    output: Optional[Path] = _output_option(),
    config: Optional[Path] = _config_option(),
    verbose: bool = _verbose_option(),
) -> None:
    """Emit closures, minimal edges and joins as JSON."""
    options = _resolve_options(
        config=config,
        lib=lib,
        load_path=load_path,
        coqbin=coqbin,
        timeout=timeout,
        triples=triples,
        verbose=verbose,
    )
    with _hierarchy_errors():
        hierarchy = _load_hierarchy(ctx, options)
        reports = build_report(hierarchy)
    normalized = HierarchyReportDTO(
        libs=list(options.libs),
        kinds=[EdgeKindReportDTO.from_report(entry) for entry in reports],
    ).model_dump()
    _write_text_to_target(output, json.dumps(normalized, indent=2, sort_keys=True) + "\n")


def main() -> None:
    app()
