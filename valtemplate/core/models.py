"""Domain models for value sources and render requests."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class SourceList(BaseModel):
    """Ordered origins that contribute to the rendering context."""

    value_files: list[Path] = Field(
        default_factory=list, description="YAML files, lowest precedence first"
    )
    overrides: list[str] = Field(
        default_factory=list, description="--set specifications in order"
    )
    string_overrides: list[str] = Field(
        default_factory=list, description="--set-string specifications in order"
    )
    use_environment: bool = Field(
        default=False, description="Merge the process environment last"
    )


class RenderRequest(BaseModel):
    """Where the template comes from for a single invocation."""

    template_path: Path | None = Field(
        default=None, description="Template file (None when reading stdin)"
    )
    from_stdin: bool = Field(default=False, description="Read template from stdin")
