"""
Plausibility heuristics for Safari's recently-closed plist.

Safari has stored the same facts under different key names across releases,
so URL/title/date lookups use ordered key lists (first match wins) plus a
substring sniff on key names for the generic fallback.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple
from urllib.parse import urlsplit

from core.config import HeuristicsConfig

from ._values import DynamicValue

# Keys that frequently contain a tab's URL, most specific first
PRIORITIZED_URL_KEYS: Tuple[str, ...] = (
    "TabURL",
    "URL",
    "URLString",
    "TabURLString",
    "HistoryURL",
    "LastVisitedURL",
)

TITLE_KEYS: Tuple[str, ...] = ("TabTitle", "Title", "Name")

# Key names observed for close timestamps
CLOSED_DATE_KEYS: Tuple[str, ...] = (
    "LastClosedDate",
    "ClosedDate",
    "CloseDate",
    "DateClosed",
    "ClosedTimestamp",
    "TabCloseDate",
)


@dataclass(frozen=True)
class RecoveryKeys:
    """Key names the recovery engine looks up, grouped so they can be configured."""
    url_keys: Tuple[str, ...] = PRIORITIZED_URL_KEYS
    title_keys: Tuple[str, ...] = TITLE_KEYS
    closed_date_keys: Tuple[str, ...] = CLOSED_DATE_KEYS
    entries_key: str = "ClosedTabOrWindowPersistentStates"
    persistent_state_key: str = "PersistentState"
    tab_states_key: str = "TabStates"
    overview_title_key: str = "TabOverviewTitle"
    window_title_key: str = "WindowTitle"

    @classmethod
    def from_config(cls, config: Optional[HeuristicsConfig]) -> "RecoveryKeys":
        """Apply the non-empty overrides from a HeuristicsConfig to the defaults."""
        keys = cls()
        if config is None:
            return keys

        overrides = {}
        for name in ("url_keys", "title_keys", "closed_date_keys"):
            value = getattr(config, name)
            if value:
                overrides[name] = tuple(value)
        for name in (
            "entries_key",
            "persistent_state_key",
            "tab_states_key",
            "overview_title_key",
            "window_title_key",
        ):
            value = getattr(config, name)
            if value:
                overrides[name] = value
        return replace(keys, **overrides)


DEFAULT_KEYS = RecoveryKeys()


def is_plausible_url(value: str) -> bool:
    """
    Cheap syntactic screen: a scheme is present, or the string starts with ``www.``.

    Examples:
        >>> is_plausible_url("https://example.com")
        True
        >>> is_plausible_url("www.example.com")
        True
        >>> is_plausible_url("not a url")
        False
    """
    trimmed = value.strip()
    if not trimmed:
        return False
    if _has_scheme(trimmed):
        return True
    return trimmed.startswith("www.")


def _has_scheme(candidate: str) -> bool:
    # Embedded whitespace means the string does not parse as a URL at all
    if any(char.isspace() for char in candidate):
        return False
    try:
        return bool(urlsplit(candidate).scheme)
    except ValueError:
        return False


def key_suggests_url(key: str) -> bool:
    return "url" in key.lower()


def key_suggests_title(key: str) -> bool:
    return "title" in key.lower()


def sanitize_title(title: str) -> str:
    """Collapse whitespace and newline runs into single spaces."""
    return " ".join(title.split())


def extract_title(mapping: Mapping[str, DynamicValue], keys: RecoveryKeys = DEFAULT_KEYS) -> Optional[str]:
    """Return the first non-blank title under ``keys.title_keys``, sanitized."""
    for key in keys.title_keys:
        value = mapping.get(key)
        if isinstance(value, str) and value.strip():
            return sanitize_title(value)
    return None
