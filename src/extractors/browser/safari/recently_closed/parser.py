"""
Safari RecentlyClosedTabs.plist parsing.

``read_plist_root`` is the only step that touches the filesystem and the only
one that raises. ``extract_window_records`` is total: any unexpected shape
contributes nothing, so a malformed document yields an empty list.
"""

from __future__ import annotations

import plistlib
from pathlib import Path
from typing import List
from xml.parsers.expat import ExpatError

from core.logging import get_logger

from ....exceptions import PlistLoadError
from ._assembler import assemble_window
from ._heuristics import DEFAULT_KEYS, RecoveryKeys
from ._schemas import WindowRecord
from ._values import DEFAULT_MAX_DEPTH, DynamicValue, normalize_plist_value

LOGGER = get_logger("extractors.browser.safari.recently_closed.parser")


def read_plist_root(file_path: Path, max_depth: int = DEFAULT_MAX_DEPTH) -> DynamicValue:
    """
    Load a binary or XML plist and normalize it into a DynamicValue tree.

    Raises:
        PlistLoadError: File missing/unreadable or not a valid plist
    """
    try:
        with open(file_path, "rb") as f:
            raw = plistlib.load(f)
    except OSError as exc:
        raise PlistLoadError(file_path, exc.strerror or str(exc)) from exc
    except (ValueError, ExpatError) as exc:
        raise PlistLoadError(file_path, f"not a valid plist ({exc})") from exc
    except RecursionError as exc:
        # plistlib decodes nested containers recursively
        raise PlistLoadError(file_path, "nesting too deep to decode") from exc

    LOGGER.info("Loaded %s", file_path)
    return normalize_plist_value(raw, max_depth)


def extract_window_records(
    root: DynamicValue,
    keys: RecoveryKeys = DEFAULT_KEYS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[WindowRecord]:
    """
    Collect window records in source order, dropping entries without tabs.

    Args:
        root: Document root (expected: dict holding the entries list)
        keys: Key names to look up
        max_depth: Nesting ceiling applied per entry

    Returns:
        WindowRecords, each with at least one tab
    """
    if not isinstance(root, dict):
        LOGGER.debug("Plist root is not a dictionary; nothing to recover")
        return []

    items = root.get(keys.entries_key)
    if not isinstance(items, list):
        LOGGER.debug("No %s list in plist root", keys.entries_key)
        return []

    records: List[WindowRecord] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            LOGGER.debug("Skipping entry %d: not a dictionary", index)
            continue
        record = assemble_window(item, index, keys, max_depth)
        if not record.tabs:
            LOGGER.debug("Skipping entry %d: no tabs found", index)
            continue
        records.append(record)

    LOGGER.debug("Recovered %d of %d entries", len(records), len(items))
    return records


def parse_recently_closed_windows(
    file_path: Path,
    keys: RecoveryKeys = DEFAULT_KEYS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[WindowRecord]:
    """Read RecentlyClosedTabs.plist and return its recoverable windows."""
    root = read_plist_root(file_path, max_depth)
    records = extract_window_records(root, keys, max_depth)
    LOGGER.info("Recovered %d windows from %s", len(records), file_path)
    return records
