"""Main CLI application."""

from __future__ import annotations

import logging
import sys

import typer
from typing_extensions import Annotated

from .. import __version__
from ..context import build_context, snapshot_environment
from ..core.errors import UsageError, ValtemplateError
from ..core.models import SourceList
from ..rendering import engine, functions, io
from .parsers import parse_request, split_values

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="valtemplate",
    help="Render a Jinja2 template with values from YAML files, --set and the environment.",
    add_completion=False,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"valtemplate: {__version__}")
        raise typer.Exit()


@app.command()
def render(
    templates: Annotated[
        list[str],
        typer.Argument(
            help="Template file to render.",
            metavar="TEMPLATE",
            show_default=False,
        ),
    ] = [],
    from_stdin: Annotated[
        bool,
        typer.Option("--stdin", help="Read the template from stdin."),
    ] = False,
    use_environment: Annotated[
        bool,
        typer.Option("--env", help="Pull template values from the environment."),
    ] = False,
    value_files: Annotated[
        list[str],
        typer.Option(
            "--values",
            "-f",
            help="Values in a YAML file. Repeatable, or comma separated.",
            metavar="PATH",
        ),
    ] = [],
    overrides: Annotated[
        list[str],
        typer.Option(
            "--set",
            help="Set values on the command line (key1=val1,key2=val2). Repeatable.",
            metavar="SPEC",
        ),
    ] = [],
    string_overrides: Annotated[
        list[str],
        typer.Option(
            "--set-string",
            help="Set STRING values on the command line (key1=val1,key2=val2). Repeatable.",
            metavar="SPEC",
        ),
    ] = [],
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Print version and exit.",
            callback=_print_version,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Render a template to stdout against the merged values."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

    logger.debug("Starting valtemplate")

    try:
        request = parse_request(templates, from_stdin)
        sources = SourceList(
            value_files=split_values(value_files),
            overrides=overrides,
            string_overrides=string_overrides,
            use_environment=use_environment,
        )

        # Build context
        environment = snapshot_environment()
        context = build_context(sources, environment)

        # Render template
        text = io.read_template_source(request.template_path, sys.stdin)
        jinja_env = engine.create_environment(functions.build_function_map(environment))
        template = engine.parse_template(text, jinja_env)
        engine.execute(template, context, sys.stdout)
    except UsageError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    except ValtemplateError as exc:
        logger.debug("Render failed", exc_info=True)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    logger.debug("Completed")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
