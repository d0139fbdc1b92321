"""
Reopen restore groups in Safari through AppleScript.

One ``osascript`` call per group: the first URL opens a new document
(window), the remaining URLs become tabs at the end of that window.
"""

from __future__ import annotations

import shutil
import subprocess
from typing import List, Optional, Protocol, Sequence

from core.logging import get_logger

from ....exceptions import MissingToolError, RestoreFailedError
from ._schemas import RestoreGroup

LOGGER = get_logger("extractors.browser.safari.recently_closed.opener")

OSASCRIPT_INSTALL_HINT = "osascript ships with macOS; restoring windows only works there."


class RestoreSink(Protocol):
    """Anything that can reopen restore groups."""

    def restore(self, groups: Sequence[RestoreGroup]) -> None:
        ...


def escape_for_applescript(value: str) -> str:
    """Escape characters that would break an AppleScript string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_applescript(urls: Sequence[str]) -> str:
    """Build the AppleScript that recreates one Safari window; empty for no URLs."""
    if not urls:
        return ""

    first, remaining = urls[0], list(urls[1:])
    lines: List[str] = [
        'tell application "Safari"',
        "    activate",
        f'    make new document with properties {{URL:"{escape_for_applescript(first)}"}}',
    ]

    if remaining:
        list_literal = ", ".join(f'"{escape_for_applescript(url)}"' for url in remaining)
        lines.extend([
            "    tell front window",
            f"        repeat with theURL in {{{list_literal}}}",
            "            make new tab at end of tabs with properties {URL:theURL}",
            "        end repeat",
            "    end tell",
        ])

    lines.append("end tell")
    return "\n".join(lines)


def summarize_restore(groups: Sequence[RestoreGroup]) -> str:
    """Status line such as ``Opened 3 tabs across 1 window.``"""
    tab_count = sum(len(group.urls) for group in groups)
    window_count = len(groups)
    return (
        f"Opened {tab_count} tab{'' if tab_count == 1 else 's'} "
        f"across {window_count} window{'' if window_count == 1 else 's'}."
    )


class SafariOpener:
    """Asks Safari to reopen URL groups via ``osascript``."""

    def __init__(self, timeout_seconds: float = 30.0, osascript_path: Optional[str] = None) -> None:
        self.timeout_seconds = timeout_seconds
        self._osascript_path = osascript_path

    def restore(self, groups: Sequence[RestoreGroup]) -> None:
        """
        Restore each group as its own window.

        Raises:
            MissingToolError: osascript is not available
            RestoreFailedError: Safari rejected a script or it timed out
        """
        osascript = self._resolve_osascript()
        for index, group in enumerate(groups, start=1):
            LOGGER.info("Restoring window %d/%d '%s' (%d tabs)", index, len(groups), group.title, len(group.urls))
            self._execute(osascript, build_applescript(group.urls))

    def _resolve_osascript(self) -> str:
        if self._osascript_path:
            return self._osascript_path
        found = shutil.which("osascript")
        if not found:
            raise MissingToolError("osascript", OSASCRIPT_INSTALL_HINT)
        return found

    def _execute(self, osascript: str, source: str) -> None:
        if not source:
            return
        try:
            process = subprocess.run(
                [osascript, "-e", source],
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise RestoreFailedError(
                f"Safari did not respond within {self.timeout_seconds:g} seconds"
            ) from exc
        except OSError as exc:
            raise RestoreFailedError(f"Could not run osascript: {exc}") from exc

        if process.returncode != 0:
            message = (process.stderr or process.stdout or "").strip() or f"exit status {process.returncode}"
            LOGGER.warning("osascript failed: %s", message)
            raise RestoreFailedError(f"Safari did not accept the request: {message}")
