"""Template source input."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from ..core.errors import InputUnavailableError, SourceReadError

logger = logging.getLogger(__name__)


def stdin_is_piped(stream: TextIO | None) -> bool:
    """Return True when ``stream`` is attached to a pipe or file, not a terminal.

    Args:
        stream: Standard input stream (None when closed)
    """
    if stream is None or stream.closed:
        return False
    return not stream.isatty()


def read_template_source(path: Path | None, stdin: TextIO | None = None) -> str:
    """Read the complete template text from a file or standard input.

    Args:
        path: Template file, or None to read ``stdin``
        stdin: Standard input stream used when ``path`` is None

    Returns:
        Template source text

    Raises:
        SourceReadError: If the template file cannot be read
        InputUnavailableError: If stdin mode is used without piped input
    """
    if path is None:
        if not stdin_is_piped(stdin):
            raise InputUnavailableError(
                "stdin mode is enabled, but no input is piped in"
            )
        logger.debug("Reading template from stdin")
        return stdin.read()

    logger.debug(f"Reading template: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"could not read template {path}: {exc}", path=path) from exc
