"""Reports - text, JSON and HTML renderings of recovered windows.

HTML templates live in reports/templates/.
"""

from core.app_version import get_app_version

__version__ = get_app_version()

from .recently_closed import (  # noqa: E402
    render_html,
    render_text,
    to_json_payload,
    window_label,
)

__all__ = [
    "render_html",
    "render_text",
    "to_json_payload",
    "window_label",
]
