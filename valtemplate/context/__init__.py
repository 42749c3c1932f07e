"""Value-context construction from files, overrides and the environment."""

from .builder import build_context
from .environment import apply_environment, snapshot_environment
from .files import load_file_source
from .merge import merge
from .overrides import apply_override

__all__ = [
    "apply_environment",
    "apply_override",
    "build_context",
    "load_file_source",
    "merge",
    "snapshot_environment",
]
