"""
Dynamic value tree produced from plist documents.

``plistlib`` hands back plain Python containers plus a few Apple-specific
leaves (``bytes`` blobs, ``UID`` references, naive datetimes). Recovery code
works on a closed set of shapes instead:

    None | bool | int | float | str | datetime | list | dict[str, ...]

``dict`` keeps insertion order, which the traversals rely on for
first-discovered ordering.
"""

from __future__ import annotations

import plistlib
from datetime import datetime, timezone
from typing import Any, Dict, List, Union

DynamicValue = Union[
    None,
    bool,
    int,
    float,
    str,
    datetime,
    List["DynamicValue"],
    Dict[str, "DynamicValue"],
]

# Nesting ceiling for every traversal; deeper sub-trees contribute nothing
DEFAULT_MAX_DEPTH = 64


def normalize_plist_value(value: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> DynamicValue:
    """
    Convert raw plistlib output into a DynamicValue tree.

    Args:
        value: Object returned by plistlib.load/loads
        max_depth: Containers nested deeper than this become None

    Returns:
        Normalized value. Opaque leaves (data blobs, UIDs, unknown types)
        become None rather than raising.
    """
    return _normalize(value, max_depth, 0)


def _normalize(value: Any, max_depth: int, depth: int) -> DynamicValue:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value

    if isinstance(value, datetime):
        # plistlib returns naive UTC datetimes
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    if isinstance(value, (bytes, bytearray, plistlib.UID)):
        return None

    if depth >= max_depth:
        return None

    if isinstance(value, (list, tuple)):
        return [_normalize(item, max_depth, depth + 1) for item in value]

    if isinstance(value, dict):
        return {
            key: _normalize(item, max_depth, depth + 1)
            for key, item in value.items()
            if isinstance(key, str)
        }

    return None
