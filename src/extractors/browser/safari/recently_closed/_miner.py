"""
Tab mining for one recently-closed entry.

Two tiers:
1. Specialized: ``PersistentState -> TabStates`` list, one candidate per tab.
2. Generic: walk the whole sub-tree and emit every URL-shaped value whose key
   contains "url".

Tier 1 wins whenever it yields anything; its structure is authoritative.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from core.logging import get_logger

from ._heuristics import (
    DEFAULT_KEYS,
    RecoveryKeys,
    extract_title,
    is_plausible_url,
    key_suggests_title,
    key_suggests_url,
    sanitize_title,
)
from ._schemas import TabRecord
from ._values import DEFAULT_MAX_DEPTH, DynamicValue

LOGGER = get_logger("extractors.browser.safari.recently_closed.miner")


def collect_tabs(
    entry: Mapping[str, DynamicValue],
    keys: RecoveryKeys = DEFAULT_KEYS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[TabRecord]:
    """
    Collect the deduplicated tabs belonging to one window entry.

    Args:
        entry: One dictionary from the top-level entries list
        keys: Key names to look up
        max_depth: Nesting ceiling; deeper sub-trees contribute nothing

    Returns:
        Tabs in first-discovered order, unique by URL. Empty when nothing
        URL-shaped was found.
    """
    persistent = entry.get(keys.persistent_state_key)
    if isinstance(persistent, dict):
        specialized = collect_tabs_from_tab_states(persistent, keys, max_depth)
        if specialized:
            LOGGER.debug("Using %d tab state candidates", len(specialized))
            return deduplicate_tabs(specialized)

        fallback = collect_tabs_generic(persistent, max_depth)
        if fallback:
            LOGGER.debug("No usable tab states; generic walk of persistent state found %d URLs", len(fallback))
            return deduplicate_tabs(fallback)

    found = collect_tabs_generic(entry, max_depth)
    if found:
        LOGGER.debug("Generic walk of entry found %d URLs", len(found))
    return deduplicate_tabs(found)


def collect_tabs_from_tab_states(
    persistent_state: Mapping[str, DynamicValue],
    keys: RecoveryKeys = DEFAULT_KEYS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[TabRecord]:
    """Specialized collector that understands Safari's ``TabStates`` list."""
    tab_states = persistent_state.get(keys.tab_states_key)
    if not isinstance(tab_states, list):
        return []

    tabs: List[TabRecord] = []
    for tab_state in tab_states:
        if not isinstance(tab_state, dict):
            continue
        record = tab_record_from_state(tab_state, keys, max_depth)
        if record is not None:
            tabs.append(record)
        else:
            tabs.extend(collect_tabs_generic(tab_state, max_depth))
    return tabs


def tab_record_from_state(
    tab_state: Mapping[str, DynamicValue],
    keys: RecoveryKeys = DEFAULT_KEYS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Optional[TabRecord]:
    """Convert one tab state dictionary into a TabRecord, or None without a URL."""
    url = first_url(tab_state, keys, max_depth)
    if url is None:
        return None
    return TabRecord(url=url, title=extract_title(tab_state, keys))


def first_url(
    mapping: Mapping[str, DynamicValue],
    keys: RecoveryKeys = DEFAULT_KEYS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Optional[str]:
    """
    Find the first plausible URL in a dictionary.

    Prioritized keys are checked first at every level; otherwise values are
    scanned in stored order, descending into nested dictionaries and into
    dictionaries held in lists, and accepting any plausible string.
    """
    return _first_url(mapping, keys, max_depth, 0)


def _first_url(
    mapping: Mapping[str, DynamicValue],
    keys: RecoveryKeys,
    max_depth: int,
    depth: int,
) -> Optional[str]:
    if depth >= max_depth:
        return None

    for key in keys.url_keys:
        value = mapping.get(key)
        if isinstance(value, str) and is_plausible_url(value):
            return value

    for value in mapping.values():
        if isinstance(value, dict):
            url = _first_url(value, keys, max_depth, depth + 1)
            if url is not None:
                return url
        elif isinstance(value, list):
            for element in value:
                if isinstance(element, dict):
                    url = _first_url(element, keys, max_depth, depth + 2)
                    if url is not None:
                        return url
        elif isinstance(value, str) and is_plausible_url(value):
            return value
        # Remaining leaves (None, bool, numbers, datetimes) hold no URL

    return None


def collect_tabs_generic(value: DynamicValue, max_depth: int = DEFAULT_MAX_DEPTH) -> List[TabRecord]:
    """
    Walk any value and emit a TabRecord for every URL-shaped string under a "url" key.

    Every branch is visited; sibling tabs may sit anywhere in the tree. The
    title is only set when the same key also mentions "title".
    """
    tabs: List[TabRecord] = []
    _walk_generic(value, tabs, max_depth, 0)
    return tabs


def _walk_generic(value: DynamicValue, out: List[TabRecord], max_depth: int, depth: int) -> None:
    if depth >= max_depth:
        return

    if isinstance(value, dict):
        for key, inner in value.items():
            if isinstance(inner, str) and key_suggests_url(key) and is_plausible_url(inner):
                title = sanitize_title(inner) if key_suggests_title(key) else None
                out.append(TabRecord(url=inner, title=title))
                continue
            _walk_generic(inner, out, max_depth, depth + 1)
    elif isinstance(value, list):
        for element in value:
            _walk_generic(element, out, max_depth, depth + 1)


def deduplicate_tabs(tabs: Iterable[TabRecord]) -> List[TabRecord]:
    """Drop repeated URLs, keeping the first occurrence and the original order."""
    seen = set()
    result: List[TabRecord] = []
    for tab in tabs:
        if tab.url in seen:
            continue
        seen.add(tab.url)
        result.append(tab)
    return result
