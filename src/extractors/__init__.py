"""
Extractors for browser artifacts.

Folder Structure:
- browser/safari/                   Safari path patterns
- browser/safari/recently_closed/   RecentlyClosedTabs.plist recovery and restore
"""

from .exceptions import ExtractorError, MissingToolError, PlistLoadError, RestoreFailedError

__all__ = [
    "ExtractorError",
    "MissingToolError",
    "PlistLoadError",
    "RestoreFailedError",
]
