"""YAML value-file loading."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..core.errors import SourceParseError, SourceReadError

logger = logging.getLogger(__name__)


def load_file_source(path: Path) -> dict[str, Any]:
    """Read a YAML file into a value mapping.

    Args:
        path: Path to the values file

    Returns:
        Parsed mapping (empty for an empty document)

    Raises:
        SourceReadError: If the file cannot be opened or read
        SourceParseError: If the content is not YAML or not a mapping
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"could not read {path}: {exc}", path=path) from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        raise SourceParseError(
            f"failed to parse {path}: {exc}",
            path=path,
            line=mark.line + 1 if mark is not None else None,
            column=mark.column + 1 if mark is not None else None,
        ) from exc

    if data is None:
        logger.debug(f"Values file {path} is empty")
        return {}

    if not isinstance(data, dict):
        raise SourceParseError(
            f"failed to parse {path}: top-level value must be a mapping, "
            f"got {type(data).__name__}",
            path=path,
        )

    # Keys such as `1` or `true` are parsed as non-strings by YAML.
    return _stringify_keys(data)


def _stringify_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _stringify_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify_keys(item) for item in value]
    return value
