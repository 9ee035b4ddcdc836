from __future__ import annotations

import os
from pathlib import Path

_TRUTHY_VALUES = {"1", "true", "yes", "on"}

COQBIN_ENV = "COQBIN"
COQTOP_NAME = "coqtop"


def env_text(name: str, *, default: str = "") -> str:
    return os.getenv(name, default).strip()


def env_flag(name: str) -> bool:
    return env_text(name).lower() in _TRUTHY_VALUES


def coqtop_executable(coqbin: str | None = None) -> str:
    """Resolve the coqtop binary.

    An explicit ``coqbin`` directory wins over ``$COQBIN``; with neither,
    ``coqtop`` is looked up on ``PATH``.
    """
    directory = coqbin if coqbin else env_text(COQBIN_ENV)
    if not directory:
        return COQTOP_NAME
    return str(Path(directory) / COQTOP_NAME)
