"""
Safari file path patterns.

Safari keeps its per-user state under ``~/Library/Safari``; sandboxed builds
and Safari Technology Preview use container directories instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

RECENTLY_CLOSED_FILENAME = "RecentlyClosedTabs.plist"

# Profile roots relative to the user's home directory, most common first
SAFARI_PROFILE_ROOTS: List[str] = [
    "Library/Safari",
    # Containerized Safari data (sandbox/container context)
    "Library/Containers/com.apple.Safari/Data/Library/Safari",
    # Safari Technology Preview container
    "Library/Containers/com.apple.SafariTechnologyPreview/Data/Library/Safari",
]

SAFARI_ARTIFACTS: Dict[str, List[str]] = {
    "recently_closed": [RECENTLY_CLOSED_FILENAME],
}


def get_artifact_paths(artifact: str, home: Optional[Path] = None) -> List[Path]:
    """
    Return candidate paths for a Safari artifact under a home directory.

    Args:
        artifact: Key into SAFARI_ARTIFACTS (e.g. "recently_closed")
        home: Home directory (defaults to the current user's)

    Raises:
        ValueError: Unknown artifact name
    """
    if artifact not in SAFARI_ARTIFACTS:
        raise ValueError(f"Unknown Safari artifact: {artifact}")

    base = home if home is not None else Path.home()
    return [
        base / root / filename
        for root in SAFARI_PROFILE_ROOTS
        for filename in SAFARI_ARTIFACTS[artifact]
    ]


def default_recently_closed_path(home: Optional[Path] = None) -> Path:
    """Path Safari uses for RecentlyClosedTabs.plist in a normal install."""
    return get_artifact_paths("recently_closed", home)[0]


def find_recently_closed_plist(home: Optional[Path] = None) -> Optional[Path]:
    """Return the first existing RecentlyClosedTabs.plist, or None."""
    for candidate in get_artifact_paths("recently_closed", home):
        if candidate.is_file():
            return candidate
    return None
