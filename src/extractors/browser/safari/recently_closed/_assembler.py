"""
Window assembly: title and close date heuristics around the mined tabs.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Mapping, Optional

from ._heuristics import DEFAULT_KEYS, RecoveryKeys, extract_title, sanitize_title
from ._miner import collect_tabs
from ._schemas import WindowRecord
from ._values import DEFAULT_MAX_DEPTH, DynamicValue


def assemble_window(
    entry: Mapping[str, DynamicValue],
    index: int,
    keys: RecoveryKeys = DEFAULT_KEYS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> WindowRecord:
    """
    Build a WindowRecord for one entry of the top-level list.

    The tab tuple may be empty; callers decide whether to keep the record.

    Args:
        entry: Entry dictionary
        index: 0-based position of the entry in the source list
        keys: Key names to look up
        max_depth: Nesting ceiling for every traversal
    """
    tabs = collect_tabs(entry, keys, max_depth)
    return WindowRecord(
        title=guess_window_title(entry, index, keys),
        closed_at=extract_closed_date(entry, keys, max_depth),
        tabs=tuple(tabs),
    )


def guess_window_title(
    entry: Mapping[str, DynamicValue],
    fallback_index: int,
    keys: RecoveryKeys = DEFAULT_KEYS,
) -> str:
    """Pick a human-friendly title, falling back to ``"Window N"`` (1-based)."""
    candidates: List[str] = []

    persistent = entry.get(keys.persistent_state_key)
    if isinstance(persistent, dict):
        for key in (keys.overview_title_key, keys.window_title_key):
            value = persistent.get(key)
            if isinstance(value, str) and value:
                candidates.append(value)

        tab_states = persistent.get(keys.tab_states_key)
        if isinstance(tab_states, list):
            for tab_state in tab_states:
                if not isinstance(tab_state, dict):
                    continue
                title = extract_title(tab_state, keys)
                if title:
                    candidates.append(title)
                    break

    for key in keys.title_keys:
        value = entry.get(key)
        if isinstance(value, str) and value:
            candidates.append(value)

    for candidate in candidates:
        title = sanitize_title(candidate)
        if title:
            return title

    return f"Window {fallback_index + 1}"


def extract_closed_date(
    entry: Mapping[str, DynamicValue],
    keys: RecoveryKeys = DEFAULT_KEYS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Optional[datetime]:
    """
    Locate a close date for a window entry.

    Order: known keys on the entry, known keys on its persistent state, the
    first date anywhere in the persistent state, the first date anywhere in
    the entry. The first tier with a result wins.
    """
    for key in keys.closed_date_keys:
        value = entry.get(key)
        if isinstance(value, datetime):
            return value

    persistent = entry.get(keys.persistent_state_key)
    if isinstance(persistent, dict):
        for key in keys.closed_date_keys:
            value = persistent.get(key)
            if isinstance(value, datetime):
                return value
        found = find_first_date(persistent, max_depth)
        if found is not None:
            return found

    return find_first_date(entry, max_depth)


def find_first_date(value: DynamicValue, max_depth: int = DEFAULT_MAX_DEPTH) -> Optional[datetime]:
    """Depth-first search for the first datetime, in stored order."""
    return _find_first_date(value, max_depth, 0)


def _find_first_date(value: DynamicValue, max_depth: int, depth: int) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if depth >= max_depth:
        return None

    if isinstance(value, dict):
        children = value.values()
    elif isinstance(value, list):
        children = value
    else:
        return None

    for child in children:
        found = _find_first_date(child, max_depth, depth + 1)
        if found is not None:
            return found
    return None
