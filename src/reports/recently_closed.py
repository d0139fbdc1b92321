"""Recently closed windows report.

Renders recovered windows as a plain listing (terminal), a JSON payload, or a
standalone HTML page.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from extractors.browser.safari.recently_closed import WindowRecord

from .dates import format_datetime, format_iso
from .paths import get_templates_dir

TEMPLATE_NAME = "recently_closed.html"


def window_label(window: WindowRecord, date_format: str = "iso") -> str:
    """Header for a window: its close time when known, otherwise its title."""
    if window.closed_at is not None:
        return f"Closed {format_datetime(window.closed_at, date_format)}"
    return window.title


def render_text(windows: Sequence[WindowRecord], date_format: str = "iso") -> str:
    """Numbered plain-text listing; numbers match ``restore --window N`` and ``--tab W:T``."""
    if not windows:
        return "No windows or tabs detected in the recently closed list."

    lines: List[str] = []
    for position, window in enumerate(windows, start=1):
        count = len(window.tabs)
        lines.append(f"[{position}] {window.title} ({count} tab{'' if count == 1 else 's'})")
        if window.closed_at is not None:
            lines.append(f"    {window_label(window, date_format)}")
        for tab_position, tab in enumerate(window.tabs, start=1):
            lines.append(f"    {tab_position}. {tab.display_title}")
            if tab.display_title != tab.url:
                lines.append(f"       {tab.url}")
    return "\n".join(lines)


def to_json_payload(windows: Sequence[WindowRecord]) -> List[Dict[str, Any]]:
    """JSON-ready structure; timestamps as ISO 8601 UTC strings."""
    return [
        {
            "title": window.title,
            "closed_at": format_iso(window.closed_at),
            "tabs": [{"url": tab.url, "title": tab.title} for tab in window.tabs],
        }
        for window in windows
    ]


def render_html(
    windows: Sequence[WindowRecord],
    generated_at: Optional[datetime] = None,
    date_format: str = "iso",
    source: str = "",
) -> str:
    """Render the standalone HTML report."""
    generated = generated_at or datetime.now(timezone.utc)
    entries = [
        {
            "position": position,
            "title": window.title,
            "label": window_label(window, date_format),
            "closed_at": format_datetime(window.closed_at, date_format),
            "tabs": [
                {"url": tab.url, "title": tab.display_title, "linkable": _is_linkable(tab.url)}
                for tab in window.tabs
            ],
        }
        for position, window in enumerate(windows, start=1)
    ]

    env = Environment(loader=FileSystemLoader(get_templates_dir()), autoescape=True)
    template = env.get_template(TEMPLATE_NAME)
    return template.render(
        windows=entries,
        total_windows=len(entries),
        total_tabs=sum(len(entry["tabs"]) for entry in entries),
        generated_at=format_datetime(generated, date_format, include_seconds=True),
        source=source,
    )


def _is_linkable(url: str) -> bool:
    # Only web URLs become anchors; javascript: and friends stay plain text
    return url.strip().lower().startswith(("http://", "https://"))
