"""Error types raised by the hierarchy engine and its prover adapter."""

from __future__ import annotations


class HierarchyError(Exception):
    """Base class for failures the CLI reports to the user."""


class AmbiguousJoin(HierarchyError):
    """Two entities have more than one least common successor.

    This indicates a defect in the hierarchy being analysed; it is never
    resolved by picking one of the candidates.
    """

    def __init__(self, left: str, right: str, candidates: tuple[str, ...]):
        self.left = left
        self.right = right
        self.candidates = tuple(candidates)
        super().__init__(
            f"{left} and {right} have more than one least common successor: "
            f"{', '.join(self.candidates)}."
        )


class HierarchyInputError(HierarchyError):
    """A serialized hierarchy (``--triples``) could not be loaded."""


class ProverError(HierarchyError):
    """Base class for failures talking to the external prover."""


class ProverLaunchError(ProverError):
    def __init__(self, command: tuple[str, ...], detail: str):
        self.command = tuple(command)
        self.detail = detail
        super().__init__(f"Failed to launch {command[0] if command else 'prover'}: {detail}")


class ProverProcessError(ProverError):
    def __init__(self, returncode: int, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        message = f"Failed to invoke coqtop (exit {returncode})."
        if stderr:
            message = f"{message}\n{stderr}"
        super().__init__(message)


class ProverOutputError(ProverError):
    """A redirected prover output file is missing or unreadable."""

    def __init__(self, path: object, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot read prover output {path}: {detail}")


class ProverTimeoutError(ProverError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"coqtop did not finish within {timeout:g}s.")
