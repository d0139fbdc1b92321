"""Tests for window ordering and restore-group construction."""

from datetime import datetime, timezone

import pytest

from extractors.browser.safari.recently_closed import (
    RestoreGroup,
    TabRecord,
    WindowRecord,
    build_restore_groups,
    sort_by_recency,
)


def _window(title, closed_at=None, urls=("https://example.com/",)):
    return WindowRecord(
        title=title,
        closed_at=closed_at,
        tabs=tuple(TabRecord(url) for url in urls),
    )


def _at(day):
    return datetime(2025, 3, day, tzinfo=timezone.utc)


class TestSortByRecency:
    def test_newest_first(self):
        windows = [_window("old", _at(1)), _window("new", _at(3)), _window("mid", _at(2))]
        assert [w.title for w in sort_by_recency(windows)] == ["new", "mid", "old"]

    def test_undated_after_dated_in_source_order(self):
        windows = [
            _window("undated-a"),
            _window("dated", _at(1)),
            _window("undated-b"),
        ]
        assert [w.title for w in sort_by_recency(windows)] == ["dated", "undated-a", "undated-b"]

    def test_ties_keep_source_order(self):
        windows = [_window("first", _at(2)), _window("second", _at(2)), _window("newer", _at(5))]
        assert [w.title for w in sort_by_recency(windows)] == ["newer", "first", "second"]

    def test_input_not_mutated(self):
        windows = [_window("a", _at(1)), _window("b", _at(2))]
        sort_by_recency(windows)
        assert [w.title for w in windows] == ["a", "b"]

    def test_empty(self):
        assert sort_by_recency([]) == []


class TestBuildRestoreGroups:
    def test_all_windows(self):
        windows = [
            _window("one", urls=("https://a.example/", "https://b.example/")),
            _window("two", urls=("https://c.example/",)),
        ]

        groups = build_restore_groups(windows)

        assert groups == [
            RestoreGroup("one", ("https://a.example/", "https://b.example/")),
            RestoreGroup("two", ("https://c.example/",)),
        ]

    def test_selection_is_one_based_and_kept_in_display_order(self):
        windows = [_window(name) for name in ("one", "two", "three")]

        groups = build_restore_groups(windows, selected=[3, 1])

        assert [group.title for group in groups] == ["one", "three"]

    def test_windows_without_urls_are_skipped(self):
        windows = [_window("empty", urls=()), _window("full")]
        assert [group.title for group in build_restore_groups(windows)] == ["full"]

    @pytest.mark.parametrize("selected", [[0], [4], [-1], [1, 9]])
    def test_out_of_range_selection(self, selected):
        windows = [_window(name) for name in ("one", "two", "three")]
        with pytest.raises(ValueError, match="out of range 1-3"):
            build_restore_groups(windows, selected=selected)

    def test_empty_selection_yields_no_groups(self):
        assert build_restore_groups([_window("one")], selected=[]) == []

    def test_restore_group_requires_urls(self):
        with pytest.raises(ValueError):
            RestoreGroup("nothing", ())


class TestTabSelection:
    @pytest.fixture()
    def windows(self):
        return [
            _window("one", urls=("https://a.example/", "https://b.example/", "https://c.example/")),
            _window("two", urls=("https://d.example/",)),
            _window("three", urls=("https://e.example/", "https://f.example/")),
        ]

    def test_partial_window_keeps_tab_order(self, windows):
        groups = build_restore_groups(windows, selected_tabs={1: [3, 1]})

        assert groups == [RestoreGroup("one", ("https://a.example/", "https://c.example/"))]

    def test_windows_without_chosen_tabs_are_dropped(self, windows):
        groups = build_restore_groups(windows, selected_tabs={3: [2], 2: []})
        assert groups == [RestoreGroup("three", ("https://f.example/",))]

    def test_whole_and_partial_windows_combined(self, windows):
        groups = build_restore_groups(windows, selected=[2], selected_tabs={1: [2], 2: [1]})

        assert groups == [
            RestoreGroup("one", ("https://b.example/",)),
            RestoreGroup("two", ("https://d.example/",)),
        ]

    def test_only_tab_selection_does_not_select_everything(self, windows):
        groups = build_restore_groups(windows, selected_tabs={2: [1]})
        assert [group.title for group in groups] == ["two"]

    @pytest.mark.parametrize("tabs", [[0], [4], [1, 7]])
    def test_tab_out_of_range(self, windows, tabs):
        with pytest.raises(ValueError, match="Tab number\\(s\\) out of range 1-3 in window 1"):
            build_restore_groups(windows, selected_tabs={1: tabs})

    def test_window_out_of_range_in_tab_selection(self, windows):
        with pytest.raises(ValueError, match="Window number\\(s\\) out of range 1-3: 9"):
            build_restore_groups(windows, selected_tabs={9: [1]})
