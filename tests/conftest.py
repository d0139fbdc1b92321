"""Global pytest configuration and shared plist fixtures."""

import plistlib
import struct
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import pytest


@pytest.fixture()
def write_plist(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that dumps *data* as a plist under tmp_path."""

    def _write(data: Any, name: str = "RecentlyClosedTabs.plist", fmt=plistlib.FMT_BINARY) -> Path:
        path = tmp_path / name
        with open(path, "wb") as f:
            plistlib.dump(data, f, fmt=fmt)
        return path

    return _write


@pytest.fixture()
def safari_document() -> dict:
    """
    RecentlyClosedTabs.plist shaped like recent Safari releases.

    Three entries: a two-tab window with TabStates, a single closed tab
    without PersistentState, and an entry with nothing recoverable.
    Dates are naive (plistlib writes them as UTC).
    """
    return {
        "ClosedTabOrWindowPersistentStates": [
            {
                "PersistentState": {
                    "WindowTitle": "Research",
                    "DateClosed": datetime(2025, 3, 1, 9, 30),
                    "TabStates": [
                        {
                            "TabURL": "https://docs.python.org/3/",
                            "TabTitle": "3.13 Documentation",
                            "TabUUID": "A1",
                            "SessionState": b"\x00\x01binary",
                        },
                        {
                            "TabURL": "https://peps.python.org/",
                            "TabTitle": "PEP Index",
                            "TabUUID": "A2",
                        },
                    ],
                },
                "PersistentStateType": 1,
            },
            {
                "TabTitle": "Closed tab",
                "DateClosed": datetime(2025, 3, 2, 18, 0),
                "PersistentState": {
                    "TabURL": "https://example.com/closed",
                    "TabTitle": "Closed tab",
                },
            },
            {
                "PersistentState": {
                    "WindowTitle": "Empty window",
                    "DateClosed": datetime(2025, 3, 3, 8, 0),
                    "TabStates": [],
                },
            },
        ]
    }


def build_nested_array_bplist(depth: int) -> bytes:
    """
    Hand-assemble a binary plist holding *depth* nested one-element arrays.

    plistlib.dump cannot write this (it recurses too), so objects, offset
    table and trailer are packed directly with 2-byte refs and offsets.
    """
    body = bytearray(b"bplist00")
    offsets = []
    for index in range(depth):
        offsets.append(len(body))
        body += b"\xa1" + struct.pack(">H", index + 1)
    offsets.append(len(body))
    body += b"\xa0"

    table_offset = len(body)
    for offset in offsets:
        body += struct.pack(">H", offset)
    body += struct.pack(">6xBBQQQ", 2, 2, len(offsets), 0, table_offset)
    return bytes(body)


@pytest.fixture()
def deeply_nested_plist(tmp_path: Path) -> Path:
    """Binary plist 5000 arrays deep, beyond the interpreter's recursion limit."""
    path = tmp_path / "deep" / "RecentlyClosedTabs.plist"
    path.parent.mkdir()
    path.write_bytes(build_nested_array_bplist(5000))
    return path
