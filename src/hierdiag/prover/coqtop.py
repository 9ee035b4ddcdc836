from __future__ import annotations

import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ContextManager, Sequence

from hierdiag.exceptions import (
    ProverLaunchError,
    ProverProcessError,
    ProverTimeoutError,
)
from hierdiag.pipeline import HierarchyInput
from hierdiag.prover.parsing import parse_canonicals, parse_coercions, read_output
from hierdiag.runtime.env_policy import coqtop_executable

DEFAULT_LIBS: tuple[str, ...] = ("all.all",)
# Large enough that coqtop never wraps a line of its output.
_PRINTING_WIDTH = 4611686018427387903
_CANONICALS_BASENAME = "canonicals"
_COERCIONS_BASENAME = "coercions"
_REDIRECT_SUFFIX = ".out"

ProcessFactory = Callable[..., subprocess.Popen]
TempdirFactory = Callable[..., ContextManager[str]]
Note = Callable[[str], None]


@dataclass(frozen=True)
class CoqtopRequest:
    libs: tuple[str, ...] = DEFAULT_LIBS
    load_paths: tuple[tuple[str, str], ...] = ()
    coqbin: str | None = None
    timeout: float | None = None


def coqtop_command(request: CoqtopRequest) -> list[str]:
    command = [coqtop_executable(request.coqbin), "-w", "none"]
    for physical, logical in request.load_paths:
        command.extend(["-R", physical, logical])
    return command


def _coq_string(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def coqtop_script(libs: Sequence[str], canonicals_base: str, coercions_base: str) -> str:
    return (
        f"Set Printing Width {_PRINTING_WIDTH}.\n"
        f"From mathcomp Require Import {' '.join(libs)}.\n"
        f"Redirect {_coq_string(canonicals_base)} Print Canonical Projections.\n"
        f"Redirect {_coq_string(coercions_base)} Print Graph.\n"
    )


def _run_coqtop(
    command: list[str],
    script: str,
    *,
    timeout: float | None,
    process_factory: ProcessFactory,
) -> None:
    try:
        proc = process_factory(
            command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except OSError as exc:
        raise ProverLaunchError(tuple(command), str(exc)) from exc
    try:
        _out, err = proc.communicate(script, timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        proc.kill()
        proc.communicate()
        raise ProverTimeoutError(float(timeout or 0)) from exc
    if proc.returncode != 0:
        raise ProverProcessError(proc.returncode, (err or "").strip())


def collect_hierarchy(
    request: CoqtopRequest,
    *,
    process_factory: ProcessFactory = subprocess.Popen,
    tempdir_factory: TempdirFactory = tempfile.TemporaryDirectory,
    note: Note | None = None,
) -> HierarchyInput:
    """Run coqtop and parse the canonical projections and coercions it prints.

    The redirected output files live in a temporary directory that is
    removed on every exit path, including a failing coqtop.
    """
    command = coqtop_command(request)
    with tempdir_factory(prefix="hierdiag-") as workdir:
        root = Path(workdir)
        canonicals_base = root / _CANONICALS_BASENAME
        coercions_base = root / _COERCIONS_BASENAME
        if note is not None:
            note("running " + " ".join(command))
        _run_coqtop(
            command,
            coqtop_script(request.libs, str(canonicals_base), str(coercions_base)),
            timeout=request.timeout,
            process_factory=process_factory,
        )
        canonicals = parse_canonicals(
            read_output(root / (_CANONICALS_BASENAME + _REDIRECT_SUFFIX))
        )
        coercions = parse_coercions(read_output(root / (_COERCIONS_BASENAME + _REDIRECT_SUFFIX)))
    if note is not None:
        note(f"collected {len(canonicals)} canonical projections, {len(coercions)} coercions")
    return HierarchyInput(canonicals=tuple(canonicals), coercions=tuple(coercions))
