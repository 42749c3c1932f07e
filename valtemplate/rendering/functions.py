"""Helper-function library exposed to templates.

Names follow the Sprig library used by Go templates. Every helper takes its
subject as the first argument, so ``{{ name | trimPrefix("v") }}`` and
``{{ trimPrefix(name, "v") }}`` are equivalent.
"""

from __future__ import annotations

import base64
import datetime as dt
import hashlib
import json
import re
import textwrap
import uuid
import zlib
from typing import Any, Callable, Mapping

import yaml

from ..context.merge import merge as merge_mappings
from ..core.errors import TemplateExecutionError


# Strings


def trim_prefix(value: str, prefix: str) -> str:
    return value[len(prefix) :] if prefix and value.startswith(prefix) else value


def trim_suffix(value: str, suffix: str) -> str:
    return value[: -len(suffix)] if suffix and value.endswith(suffix) else value


def trim_all(value: str, chars: str) -> str:
    return value.strip(chars)


def quote(*values: Any) -> str:
    return " ".join(json.dumps(str(v)) for v in values if v is not None)


def squote(*values: Any) -> str:
    return " ".join(f"'{v}'" for v in values if v is not None)


def nindent(value: str, width: int) -> str:
    """Newline followed by ``value`` with every line indented."""
    pad = " " * width
    return "\n" + "\n".join(pad + line for line in str(value).split("\n"))


def contains(value: str, substring: str) -> bool:
    return substring in value


def has_prefix(value: str, prefix: str) -> bool:
    return value.startswith(prefix)


def has_suffix(value: str, suffix: str) -> bool:
    return value.endswith(suffix)


def repeat(value: str, count: int) -> str:
    return value * count


def substr(value: str, start: int, end: int) -> str:
    if start < 0:
        return value[:end]
    if end < 0 or end > len(value):
        return value[start:]
    return value[start:end]


def trunc(value: str, length: int) -> str:
    if length < 0:
        return value[length:] if -length < len(value) else value
    return value[:length]


_WORD_BOUNDARY = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+(?![a-z])")


def _words(value: str) -> list[str]:
    return _WORD_BOUNDARY.findall(value)


def camelcase(value: str) -> str:
    return "".join(word.capitalize() for word in _words(value))


def snakecase(value: str) -> str:
    return "_".join(word.lower() for word in _words(value))


def kebabcase(value: str) -> str:
    return "-".join(word.lower() for word in _words(value))


def initials(value: str) -> str:
    return "".join(word[0] for word in value.split())


def wrap(value: str, width: int) -> str:
    return "\n".join(textwrap.wrap(value, width))


# Defaults and flow control


def empty(value: Any) -> bool:
    return not value


def coalesce(*values: Any) -> Any:
    for value in values:
        if value:
            return value
    return None


def ternary(condition: Any, true_value: Any, false_value: Any) -> Any:
    return true_value if condition else false_value


def required(value: Any, message: str) -> Any:
    if value is None or value == "":
        raise TemplateExecutionError(message)
    return value


def fail(message: str) -> None:
    raise TemplateExecutionError(message)


# Encoding


def b64enc(value: str) -> str:
    return base64.b64encode(str(value).encode("utf-8")).decode("ascii")


def b64dec(value: str) -> str:
    return base64.b64decode(value).decode("utf-8")


def to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def to_pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2)


def from_json(value: str) -> Any:
    return json.loads(value)


def to_yaml(value: Any) -> str:
    return yaml.safe_dump(value, default_flow_style=False, sort_keys=False).rstrip("\n")


def from_yaml(value: str) -> Any:
    return yaml.safe_load(value)


# Lists


def make_list(*values: Any) -> list[Any]:
    return list(values)


def split_list(value: str, separator: str) -> list[str]:
    return value.split(separator)


def compact(values: list[Any]) -> list[Any]:
    return [value for value in values if value]


def has(values: list[Any], needle: Any) -> bool:
    return needle in values


def sort_alpha(values: list[Any]) -> list[str]:
    return sorted(str(value) for value in values)


def uniq(values: list[Any]) -> list[Any]:
    result: list[Any] = []
    for value in values:
        if value not in result:
            result.append(value)
    return result


def rest(values: list[Any]) -> list[Any]:
    return list(values[1:])


def initial(values: list[Any]) -> list[Any]:
    return list(values[:-1])


def append(values: list[Any], value: Any) -> list[Any]:
    return [*values, value]


def prepend(values: list[Any], value: Any) -> list[Any]:
    return [value, *values]


def concat(*lists: list[Any]) -> list[Any]:
    return [item for values in lists for item in values]


# Dictionaries


def make_dict(*pairs: Any, **items: Any) -> dict[str, Any]:
    """Build a dict from alternating keys and values, plus keyword items."""
    names = pairs[::2]
    entries = list(pairs[1::2]) + [""] * (len(names) - len(pairs[1::2]))
    result = {str(k): v for k, v in zip(names, entries)}
    result.update(items)
    return result


def keys(*mappings: Mapping[str, Any]) -> list[str]:
    return [key for mapping in mappings for key in mapping]


def values(mapping: Mapping[str, Any]) -> list[Any]:
    return list(mapping.values())


def get(mapping: Mapping[str, Any], key: str) -> Any:
    return mapping.get(key, "")


def has_key(mapping: Mapping[str, Any], key: str) -> bool:
    return key in mapping


def pluck(key: str, *mappings: Mapping[str, Any]) -> list[Any]:
    return [mapping[key] for mapping in mappings if key in mapping]


def pick(mapping: Mapping[str, Any], *names: str) -> dict[str, Any]:
    return {k: v for k, v in mapping.items() if k in names}


def omit(mapping: Mapping[str, Any], *names: str) -> dict[str, Any]:
    return {k: v for k, v in mapping.items() if k not in names}


def merge(dst: Mapping[str, Any], *sources: Mapping[str, Any]) -> dict[str, Any]:
    """Merge mappings left to right; later mappings win."""
    result = dict(dst)
    for source in sources:
        result = merge_mappings(result, source)
    return result


# Math


def add(*numbers: Any) -> Any:
    return sum(numbers)


def sub(a: Any, b: Any) -> Any:
    return a - b


def mul(*numbers: Any) -> Any:
    result = 1
    for number in numbers:
        result *= number
    return result


def div(a: int, b: int) -> int:
    if b == 0:
        raise TemplateExecutionError("integer divide by zero")
    # Truncate toward zero like integer division in Go.
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def mod(a: int, b: int) -> int:
    if b == 0:
        raise TemplateExecutionError("integer divide by zero")
    return a - b * div(a, b)


def add1(value: int) -> int:
    return value + 1


def until(count: int) -> list[int]:
    return list(range(count)) if count >= 0 else list(range(0, count, -1))


def seq(*bounds: int) -> str:
    if len(bounds) == 1:
        start, stop, step = 1, bounds[0], 1
    elif len(bounds) == 2:
        start, stop = bounds
        step = 1 if stop >= start else -1
    else:
        start, step, stop = bounds[:3]
    if step == 0:
        return ""
    end = stop + (1 if step > 0 else -1)
    return " ".join(str(n) for n in range(start, end, step))


# Regular expressions


def regex_match(value: str, pattern: str) -> bool:
    return re.search(pattern, value) is not None


def regex_find(value: str, pattern: str) -> str:
    match = re.search(pattern, value)
    return match.group(0) if match else ""


def regex_find_all(value: str, pattern: str, limit: int = -1) -> list[str]:
    found = [m.group(0) for m in re.finditer(pattern, value)]
    return found if limit < 0 else found[:limit]


_GO_GROUP_REF = re.compile(r"\$\{?(\w+)\}?")
_ENV_REF = re.compile(r"\$\{(\w+)\}|\$(\w+)")


def regex_replace_all(value: str, pattern: str, replacement: str) -> str:
    # Replacement uses Go-style $1 and ${name} group references.
    template = _GO_GROUP_REF.sub(r"\\g<\1>", replacement.replace("\\", "\\\\"))
    return re.sub(pattern, template, value)


def regex_split(value: str, pattern: str, limit: int = -1) -> list[str]:
    return re.split(pattern, value, maxsplit=0 if limit < 0 else max(limit - 1, 0))


# Hashing


def sha1sum(value: str) -> str:
    return hashlib.sha1(value.encode("utf-8")).hexdigest()


def sha256sum(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def adler32sum(value: str) -> str:
    return str(zlib.adler32(value.encode("utf-8")))


# Time and identifiers


def now() -> dt.datetime:
    return dt.datetime.now().astimezone()


def date(value: dt.datetime, fmt: str = "%Y-%m-%d") -> str:
    return value.strftime(fmt)


def unix_epoch(value: dt.datetime) -> str:
    return str(int(value.timestamp()))


def uuidv4() -> str:
    return str(uuid.uuid4())


def build_function_map(environment: Mapping[str, str]) -> dict[str, Callable[..., Any]]:
    """Return the helper functions keyed by their template names.

    Args:
        environment: Snapshot used by ``env`` and ``expandenv``

    Returns:
        Mapping of template name to callable
    """

    def env(name: str) -> str:
        return environment.get(name, "")

    def expandenv(value: str) -> str:
        return _ENV_REF.sub(
            lambda m: environment.get(m.group(1) or m.group(2), ""), value
        )

    return {
        # Strings
        "trimPrefix": trim_prefix,
        "trimSuffix": trim_suffix,
        "trimAll": trim_all,
        "quote": quote,
        "squote": squote,
        "nindent": nindent,
        "contains": contains,
        "hasPrefix": has_prefix,
        "hasSuffix": has_suffix,
        "repeat": repeat,
        "substr": substr,
        "trunc": trunc,
        "camelcase": camelcase,
        "snakecase": snakecase,
        "kebabcase": kebabcase,
        "initials": initials,
        "wrap": wrap,
        # Defaults and flow control
        "empty": empty,
        "coalesce": coalesce,
        "ternary": ternary,
        "required": required,
        "fail": fail,
        # Encoding
        "b64enc": b64enc,
        "b64dec": b64dec,
        "toJson": to_json,
        "toPrettyJson": to_pretty_json,
        "fromJson": from_json,
        "toYaml": to_yaml,
        "fromYaml": from_yaml,
        # Lists
        "list": make_list,
        "splitList": split_list,
        "compact": compact,
        "has": has,
        "sortAlpha": sort_alpha,
        "uniq": uniq,
        "rest": rest,
        "initial": initial,
        "append": append,
        "prepend": prepend,
        "concat": concat,
        # Dictionaries
        "dict": make_dict,
        "keys": keys,
        "values": values,
        "get": get,
        "hasKey": has_key,
        "pluck": pluck,
        "pick": pick,
        "omit": omit,
        "merge": merge,
        # Math
        "add": add,
        "sub": sub,
        "mul": mul,
        "div": div,
        "mod": mod,
        "add1": add1,
        "until": until,
        "seq": seq,
        # Regular expressions
        "regexMatch": regex_match,
        "regexFind": regex_find,
        "regexFindAll": regex_find_all,
        "regexReplaceAll": regex_replace_all,
        "regexSplit": regex_split,
        # Hashing
        "sha1sum": sha1sum,
        "sha256sum": sha256sum,
        "adler32sum": adler32sum,
        # Environment
        "env": env,
        "expandenv": expandenv,
        # Time and identifiers
        "now": now,
        "date": date,
        "unixEpoch": unix_epoch,
        "uuidv4": uuidv4,
    }
