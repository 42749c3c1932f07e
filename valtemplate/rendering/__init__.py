"""Template parsing and strict-key execution."""

from .engine import create_environment, execute, parse_template
from .functions import build_function_map
from .io import read_template_source

__all__ = [
    "build_function_map",
    "create_environment",
    "execute",
    "parse_template",
    "read_template_source",
]
