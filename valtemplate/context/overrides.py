"""Parsing of ``--set`` style inline overrides.

The grammar is the one popularised by Helm:

    name=value,outer.inner=value,list[0]=value,list[1].name=value,items={a,b}

Assignments are separated by commas, dots descend into nested mappings and
brackets address list indices. A backslash makes the next character literal.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from ..core.errors import OverrideSyntaxError

logger = logging.getLogger(__name__)

MAX_INDEX = 65536
MAX_NESTED_NAME_LEVEL = 30

_INDEX_PATTERN = re.compile(r"^-?\d+$")
_INT_PATTERN = re.compile(r"^[+-]?\d+$")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def apply_override(
    mapping: dict[str, Any], spec: str, *, string_values: bool = False
) -> dict[str, Any]:
    """Parse an override spec and set its paths inside ``mapping``.

    The mapping is modified in place, so list indices address items that
    earlier sources already put there.

    Args:
        mapping: Context to update
        spec: Override specification, e.g. ``a.b=1,c[0]=x``
        string_values: Keep every value as a string instead of typing it

    Returns:
        The updated mapping

    Raises:
        OverrideSyntaxError: If the spec is malformed
    """
    logger.debug(f"Applying override: {spec}")
    _OverrideParser(spec, string_values=string_values).parse_into(mapping)
    return mapping


def typed_value(text: str) -> Any:
    """Convert an override value to bool, None or int where it looks like one."""
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None
    if text == "0":
        return 0
    # Leading zeros keep values such as zip codes as strings.
    if text and text[0] != "0" and _INT_PATTERN.match(text):
        number = int(text)
        if _INT64_MIN <= number <= _INT64_MAX:
            return number
    return text


class _OverrideParser:
    def __init__(self, spec: str, *, string_values: bool) -> None:
        self.spec = spec
        self.string_values = string_values
        self.pos = 0

    def parse_into(self, data: dict[str, Any]) -> None:
        while not self._key(data, 0):
            pass

    def _error(self, message: str) -> OverrideSyntaxError:
        return OverrideSyntaxError(
            f"failed parsing --set data {self.spec!r}: {message}", spec=self.spec
        )

    def _read(self) -> str | None:
        if self.pos >= len(self.spec):
            return None
        char = self.spec[self.pos]
        self.pos += 1
        return char

    def _peek(self) -> str | None:
        if self.pos >= len(self.spec):
            return None
        return self.spec[self.pos]

    def _until(self, stop: frozenset[str]) -> tuple[str, str | None]:
        """Read up to and including a stop character (None at end of input)."""
        chars: list[str] = []
        while True:
            char = self._read()
            if char is None:
                return "".join(chars), None
            if char == "\\":
                escaped = self._read()
                chars.append("\\" if escaped is None else escaped)
                continue
            if char in stop:
                return "".join(chars), char
            chars.append(char)

    def _set(self, data: dict[str, Any], key: str, value: Any) -> None:
        if not key:
            raise self._error("empty key")
        data[key] = value

    def _key(self, data: dict[str, Any], level: int) -> bool:
        """Parse one assignment into ``data``; return True at end of input."""
        key, last = self._until(frozenset("=[,."))

        if last is None:
            if not key:
                return True
            raise self._error(f"key {key!r} has no value")

        if last == ",":
            raise self._error(f"key {key!r} has no value (cannot end with ,)")

        if last == "=":
            value, at_end = self._value()
            self._set(data, key, value)
            return at_end

        if last == "[":
            index = self._index()
            existing = data.get(key)
            items = existing if isinstance(existing, list) else []
            items, at_end = self._list_item(items, index, level)
            self._set(data, key, items)
            return at_end

        # last == "."
        level += 1
        if level > MAX_NESTED_NAME_LEVEL:
            raise self._error(
                "value name nested level is greater than maximum supported "
                f"nested level of {MAX_NESTED_NAME_LEVEL}"
            )
        existing = data.get(key)
        inner = existing if isinstance(existing, dict) else {}
        at_end = self._key(inner, level)
        if not inner:
            raise self._error(f"key map {key!r} has no value")
        self._set(data, key, inner)
        return at_end

    def _index(self) -> int:
        text, last = self._until(frozenset("]"))
        if last is None:
            raise self._error(f"unterminated index [{text}")
        if not _INDEX_PATTERN.match(text):
            raise self._error(f"invalid index {text!r}")
        index = int(text)
        if index < 0:
            raise self._error(f"negative {index} index not allowed")
        if index > MAX_INDEX:
            raise self._error(f"index of {index} is greater than maximum supported index {MAX_INDEX}")
        return index

    def _list_item(
        self, items: list[Any], index: int, level: int
    ) -> tuple[list[Any], bool]:
        rest, last = self._until(frozenset("[.="))
        if rest:
            raise self._error(f"unexpected data at end of array index: {rest!r}")
        if last is None:
            raise self._error(f"index [{index}] has no value")

        if last == "=":
            value, at_end = self._value()
            return _set_index(items, index, value), at_end

        if last == "[":
            next_index = self._index()
            existing = items[index] if index < len(items) else None
            inner = existing if isinstance(existing, list) else []
            inner, at_end = self._list_item(inner, next_index, level)
            return _set_index(items, index, inner), at_end

        # last == "."
        existing = items[index] if index < len(items) else None
        nested = existing if isinstance(existing, dict) else {}
        at_end = self._key(nested, level)
        return _set_index(items, index, nested), at_end

    def _value(self) -> tuple[Any, bool]:
        """Parse the right-hand side of ``=``; return (value, at_end)."""
        if self._peek() is None:
            return "", True
        if self._peek() == "{":
            self._read()
            return self._brace_list()
        text, last = self._until(frozenset(","))
        return self._typed(text), last is None

    def _brace_list(self) -> tuple[list[Any], bool]:
        values: list[Any] = []
        while True:
            text, last = self._until(frozenset(",}"))
            if last is None:
                raise self._error("list must terminate with '}'")
            if last == ",":
                values.append(self._typed(text))
                continue
            if text or values:
                values.append(self._typed(text))
            break

        following = self._read()
        if following is None:
            return values, True
        if following != ",":
            raise self._error(f"unexpected {following!r} after list")
        return values, False

    def _typed(self, text: str) -> Any:
        if self.string_values:
            return text
        return typed_value(text)


def _set_index(items: list[Any], index: int, value: Any) -> list[Any]:
    if len(items) <= index:
        items.extend([None] * (index + 1 - len(items)))
    items[index] = value
    return items
