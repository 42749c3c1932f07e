"""Recursive mapping merge."""

from __future__ import annotations

import copy
from typing import Any, Mapping


def merge(dst: Mapping[str, Any], src: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``src`` over ``dst`` and return a new mapping.

    Neither input is modified and the result shares no mutable values with
    them.

    Merge rules:
        - Mappings present on both sides are merged recursively
        - Lists are replaced entirely (no element-wise merge)
        - Scalars, and any type mismatch, take the ``src`` value
        - Keys only in ``dst`` are kept
    """
    result: dict[str, Any] = {key: copy.deepcopy(value) for key, value in dst.items()}

    for key, src_value in src.items():
        dst_value = result.get(key)
        if isinstance(src_value, Mapping) and isinstance(dst_value, Mapping):
            result[key] = merge(dst_value, src_value)
        else:
            result[key] = copy.deepcopy(src_value)

    return result
