"""Adapter collecting coercion and canonical-projection edges from coqtop."""

from .coqtop import CoqtopRequest, collect_hierarchy, coqtop_command, coqtop_script
from .parsing import parse_canonicals, parse_coercions, read_output

__all__ = [
    "CoqtopRequest",
    "collect_hierarchy",
    "coqtop_command",
    "coqtop_script",
    "parse_canonicals",
    "parse_coercions",
    "read_output",
]
