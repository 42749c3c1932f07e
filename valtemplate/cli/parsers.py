"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path

from ..core.errors import UsageError
from ..core.models import RenderRequest


def split_values(values: list[str]) -> list[Path]:
    """Expand repeatable, comma-separated --values arguments into paths."""
    return [
        Path(item.strip())
        for value in values
        for item in value.split(",")
        if item.strip()
    ]


def parse_request(templates: list[str], from_stdin: bool) -> RenderRequest:
    """Validate the input mode and build the render request.

    Args:
        templates: Positional template arguments
        from_stdin: Whether --stdin was given

    Raises:
        UsageError: Unless exactly one of a template file or stdin mode is used
    """
    if from_stdin:
        if templates:
            raise UsageError(
                "a template file cannot be combined with --stdin, "
                "provide the template on stdin instead"
            )
        return RenderRequest(from_stdin=True)

    if len(templates) > 1:
        raise UsageError("too many parameters, you must provide only one template file")
    if not templates:
        raise UsageError("there are no parameters, you must provide one template file")
    return RenderRequest(template_path=Path(templates[0]))
