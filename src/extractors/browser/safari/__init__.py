"""
Safari Browser Family Extractors.

Safari is Apple's web browser, exclusive to macOS. Session recovery data is
kept in plist files (binary or XML) whose layout changes between releases.

Exported helpers:
- parse_recently_closed_windows: windows/tabs from RecentlyClosedTabs.plist
- find_recently_closed_plist: locate the plist for a user
"""

from ._patterns import default_recently_closed_path, find_recently_closed_plist
from .recently_closed import parse_recently_closed_windows

__all__ = [
    "default_recently_closed_path",
    "find_recently_closed_plist",
    "parse_recently_closed_windows",
]
