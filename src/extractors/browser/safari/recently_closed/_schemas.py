"""
Records recovered from RecentlyClosedTabs.plist.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple
from urllib.parse import urlsplit


@dataclass(frozen=True)
class TabRecord:
    """One recovered tab. Deduplication compares ``url`` only."""
    url: str
    title: Optional[str] = None

    @property
    def display_title(self) -> str:
        """Readable label: the title, else the URL's host, else the URL itself."""
        if self.title:
            return self.title
        try:
            host = urlsplit(self.url).hostname
        except ValueError:
            host = None
        return host or self.url


@dataclass(frozen=True)
class WindowRecord:
    """One recently closed window entry with at least one tab."""
    title: str
    closed_at: Optional[datetime]
    tabs: Tuple[TabRecord, ...]

    @property
    def urls(self) -> Tuple[str, ...]:
        return tuple(tab.url for tab in self.tabs)


@dataclass(frozen=True)
class RestoreGroup:
    """One window's worth of URLs to hand to a reopen sink."""
    title: str
    urls: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.urls:
            raise ValueError("RestoreGroup needs at least one URL")
