"""Safari recently closed windows - recovery from RecentlyClosedTabs.plist and restore."""

from ._heuristics import (
    DEFAULT_KEYS,
    RecoveryKeys,
    is_plausible_url,
    key_suggests_title,
    key_suggests_url,
    sanitize_title,
)
from ._schemas import RestoreGroup, TabRecord, WindowRecord
from ._values import DEFAULT_MAX_DEPTH, DynamicValue, normalize_plist_value
from .opener import RestoreSink, SafariOpener, build_applescript, summarize_restore
from .ordering import build_restore_groups, sort_by_recency
from .parser import extract_window_records, parse_recently_closed_windows, read_plist_root

__all__ = [
    "DEFAULT_KEYS",
    "DEFAULT_MAX_DEPTH",
    "DynamicValue",
    "RecoveryKeys",
    "RestoreGroup",
    "RestoreSink",
    "SafariOpener",
    "TabRecord",
    "WindowRecord",
    "build_applescript",
    "build_restore_groups",
    "extract_window_records",
    "is_plausible_url",
    "key_suggests_title",
    "key_suggests_url",
    "normalize_plist_value",
    "parse_recently_closed_windows",
    "read_plist_root",
    "sanitize_title",
    "sort_by_recency",
    "summarize_restore",
]
