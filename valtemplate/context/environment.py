"""Process environment snapshot and merge."""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping

from .merge import merge

logger = logging.getLogger(__name__)


def snapshot_environment(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Take a flat copy of the process environment.

    This is the only place the package reads ``os.environ``; callers take one
    snapshot per invocation and pass it along.

    Args:
        environ: Mapping to copy instead of the real environment

    Returns:
        Variable name to value mapping
    """
    source = os.environ if environ is None else environ
    snapshot = {str(name): str(value) for name, value in source.items()}
    logger.debug(f"Captured {len(snapshot)} environment variable(s)")
    return snapshot


def apply_environment(
    mapping: Mapping[str, Any], environment: Mapping[str, str]
) -> dict[str, Any]:
    """Merge environment variables over a value mapping.

    Args:
        mapping: Context built from earlier sources
        environment: Snapshot from :func:`snapshot_environment`

    Returns:
        New mapping where every environment variable wins over prior content
    """
    return merge(mapping, environment)
