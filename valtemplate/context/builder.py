"""Fold a source list into the rendering context."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..core.models import SourceList
from .environment import apply_environment, snapshot_environment
from .files import load_file_source
from .merge import merge
from .overrides import apply_override

logger = logging.getLogger(__name__)


def build_context(
    sources: SourceList, environment: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Build the rendering context from every configured source.

    Precedence, lowest first: value files in order, ``--set`` specs in order,
    ``--set-string`` specs in order, then the environment when enabled.

    Args:
        sources: Configured sources
        environment: Environment snapshot; taken from the process when omitted
            and environment mode is enabled

    Returns:
        Merged context mapping
    """
    logger.debug("Building rendering context")

    context: dict[str, Any] = {}

    for path in sources.value_files:
        logger.debug(f"Merging values file: {path}")
        context = merge(context, load_file_source(path))

    for spec in sources.overrides:
        context = apply_override(context, spec)

    for spec in sources.string_overrides:
        context = apply_override(context, spec, string_values=True)

    if sources.use_environment:
        if environment is None:
            environment = snapshot_environment()
        logger.debug("Merging environment variables")
        context = apply_environment(context, environment)

    logger.debug(f"Context built with {len(context)} top-level key(s)")
    return context
