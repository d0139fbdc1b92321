"""
Ordering policy and restore-group construction for recovered windows.
"""

from __future__ import annotations

from typing import Collection, List, Mapping, Optional, Sequence

from ._schemas import RestoreGroup, WindowRecord


def sort_by_recency(windows: Sequence[WindowRecord]) -> List[WindowRecord]:
    """
    Newest closed window first.

    Dated windows come before undated ones; equal dates and undated windows
    keep their source order. Tabs inside each window are untouched.
    """
    dated = [window for window in windows if window.closed_at is not None]
    undated = [window for window in windows if window.closed_at is None]
    # sorted() is stable, so ties keep source order
    dated = sorted(dated, key=lambda window: window.closed_at, reverse=True)
    return dated + undated


def build_restore_groups(
    windows: Sequence[WindowRecord],
    selected: Optional[Collection[int]] = None,
    selected_tabs: Optional[Mapping[int, Collection[int]]] = None,
) -> List[RestoreGroup]:
    """
    Turn windows into restore groups for a reopen sink.

    Args:
        windows: Windows in display order
        selected: 1-based positions of windows to restore whole
        selected_tabs: 1-based window position -> 1-based tab positions to
            restore from that window only

    With neither selection every window is restored. A window named in both
    is restored whole.

    Returns:
        One group per window with at least one chosen URL, in display order;
        tabs keep their order within the window

    Raises:
        ValueError: A window or tab position is out of range
    """
    if selected is None and selected_tabs is None:
        selected = range(1, len(windows) + 1)
    whole = set(selected or ())
    partial = dict(selected_tabs or {})

    invalid = sorted(
        position for position in whole | set(partial) if not 1 <= position <= len(windows)
    )
    if invalid:
        raise ValueError(
            f"Window number(s) out of range 1-{len(windows)}: "
            + ", ".join(str(position) for position in invalid)
        )
    for position, tab_positions in sorted(partial.items()):
        tab_count = len(windows[position - 1].tabs)
        invalid = sorted(tab for tab in tab_positions if not 1 <= tab <= tab_count)
        if invalid:
            raise ValueError(
                f"Tab number(s) out of range 1-{tab_count} in window {position}: "
                + ", ".join(str(tab) for tab in invalid)
            )

    groups: List[RestoreGroup] = []
    for position, window in enumerate(windows, start=1):
        if position in whole:
            urls = window.urls
        elif position in partial:
            chosen = set(partial[position])
            urls = tuple(tab.url for index, tab in enumerate(window.tabs, start=1) if index in chosen)
        else:
            continue
        if not urls:
            continue
        groups.append(RestoreGroup(title=window.title, urls=urls))
    return groups
