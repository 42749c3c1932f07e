"""Template rendering engine."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Mapping, TextIO

import jinja2
from jinja2 import StrictUndefined, Template, UndefinedError
from jinja2.sandbox import ImmutableSandboxedEnvironment, SecurityError
from jinja2.utils import missing

from ..core.errors import (
    MissingKeyError,
    TemplateExecutionError,
    TemplateSyntaxError,
    ValtemplateError,
)
from ..settings import RenderSettings

logger = logging.getLogger(__name__)

_UNDEFINED_NAME = re.compile(r"^'(?P<key>.+)' is undefined$")
_UNDEFINED_MEMBER = re.compile(r"has no (?:attribute|element) (?P<key>.+)$")


class MissingKeyUndefined(StrictUndefined):
    """Undefined that fails as soon as a name or key lookup comes up empty.

    Undefined values created with a hint (no previous loop item, missing
    macro argument, unsafe attribute) still fail lazily, when used.
    """

    __slots__ = ()

    def __init__(
        self,
        hint: str | None = None,
        obj: Any = missing,
        name: str | None = None,
        exc: type[jinja2.TemplateRuntimeError] = UndefinedError,
    ) -> None:
        super().__init__(hint, obj, name, exc)
        if hint is None and name is not None:
            self._fail_with_undefined_error()


class ValuesEnvironment(ImmutableSandboxedEnvironment):
    """Sandbox where mappings are read by key only.

    ``svc.items`` yields the ``items`` key, never the ``dict.items`` method.
    """

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, Mapping):
            return self._lookup_key(obj, attribute)
        return super().getattr(obj, attribute)

    def getitem(self, obj: Any, argument: Any) -> Any:
        if isinstance(obj, Mapping):
            return self._lookup_key(obj, argument)
        return super().getitem(obj, argument)

    def _lookup_key(self, obj: Mapping[Any, Any], key: Any) -> Any:
        try:
            return obj[key]
        except (KeyError, TypeError):
            return self.undefined(obj=obj, name=key)


def finalize_value(value: Any) -> Any:
    """Render booleans and None the way YAML and JSON spell them."""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return value


def create_environment(
    functions: Mapping[str, Callable[..., Any]],
    settings: RenderSettings | None = None,
) -> jinja2.Environment:
    """Create a strict, immutable Jinja2 environment with helper functions bound.

    Helpers are registered as globals. They are also registered as filters
    unless Jinja2 already ships a built-in filter with the same name.

    Args:
        functions: Helper functions keyed by template name
        settings: Whitespace options (defaults read from the environment)

    Returns:
        Configured environment
    """
    if settings is None:
        settings = RenderSettings()

    env = ValuesEnvironment(
        undefined=MissingKeyUndefined,
        finalize=finalize_value,
        autoescape=False,
        trim_blocks=settings.trim_blocks,
        lstrip_blocks=settings.lstrip_blocks,
        keep_trailing_newline=settings.keep_trailing_newline,
    )

    for name, func in functions.items():
        env.globals[name] = func
        env.filters.setdefault(name, func)

    logger.debug(f"Registered {len(functions)} helper function(s)")
    return env


def parse_template(text: str, env: jinja2.Environment) -> Template:
    """Compile template source.

    Args:
        text: Template source
        env: Environment from :func:`create_environment`

    Returns:
        Compiled template

    Raises:
        TemplateSyntaxError: If the source is malformed or uses an unknown
            filter or test
    """
    try:
        return env.from_string(text)
    except jinja2.TemplateSyntaxError as exc:
        raise TemplateSyntaxError(
            f"could not parse template: line {exc.lineno}: {exc.message}",
            line=exc.lineno,
        ) from exc


def missing_key_name(error: jinja2.UndefinedError) -> str | None:
    """Extract the offending key from a Jinja2 undefined error message."""
    message = error.message or ""
    match = _UNDEFINED_NAME.match(message) or _UNDEFINED_MEMBER.search(message)
    if match is None:
        return None
    return match.group("key").strip("'\"")


def execute(template: Template, context: Mapping[str, Any], stream: TextIO) -> None:
    """Render ``template`` against ``context``, writing output as it is produced.

    Output already written is left in place when rendering fails.

    Args:
        template: Compiled template
        context: Rendering context
        stream: Destination for rendered text

    Raises:
        MissingKeyError: If the template references an absent key
        TemplateExecutionError: If a helper function or the sandbox fails
    """
    logger.debug("Rendering template")

    try:
        for chunk in template.generate(context):
            stream.write(chunk)
    except jinja2.UndefinedError as exc:
        key = missing_key_name(exc)
        raise MissingKeyError(
            f"error executing template: map has no entry for key {key!r}"
            if key
            else f"error executing template: {exc.message}",
            key=key,
        ) from exc
    except SecurityError as exc:
        raise TemplateExecutionError(
            f"error executing template: context is read-only: {exc}"
        ) from exc
    except ValtemplateError:
        raise
    except Exception as exc:
        raise TemplateExecutionError(f"error executing template: {exc}") from exc
    finally:
        stream.flush()
