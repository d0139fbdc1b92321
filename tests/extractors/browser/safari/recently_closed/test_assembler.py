"""
Tests for window assembly (title and close-date heuristics).
"""

from datetime import datetime, timezone

from extractors.browser.safari.recently_closed._assembler import (
    assemble_window,
    extract_closed_date,
    find_first_date,
    guess_window_title,
)
from extractors.browser.safari.recently_closed._heuristics import RecoveryKeys

EARLY = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
LATE = datetime(2025, 1, 2, 12, 0, tzinfo=timezone.utc)


class TestGuessWindowTitle:
    """Test the title candidate chain."""

    def test_overview_title_first(self):
        entry = {
            "Title": "Top",
            "PersistentState": {
                "WindowTitle": "Window",
                "TabOverviewTitle": "Overview",
                "TabStates": [{"TabTitle": "Tab"}],
            },
        }
        assert guess_window_title(entry, 0) == "Overview"

    def test_window_title_second(self):
        entry = {"PersistentState": {"WindowTitle": " Work\n stuff ", "TabStates": [{"TabTitle": "Tab"}]}}
        assert guess_window_title(entry, 0) == "Work stuff"

    def test_first_tab_with_title_third(self):
        entry = {
            "Name": "Top level",
            "PersistentState": {
                "TabStates": [
                    "not a dict",
                    {"TabURL": "https://untitled.example/"},
                    {"Title": "Second tab"},
                    {"TabTitle": "Third tab"},
                ]
            },
        }
        assert guess_window_title(entry, 0) == "Second tab"

    def test_top_level_keys_in_order(self):
        entry = {"Name": "By name", "Title": "By title"}
        assert guess_window_title(entry, 0) == "By title"

    def test_blank_candidates_are_skipped(self):
        entry = {
            "TabTitle": "Fallback",
            "PersistentState": {"TabOverviewTitle": "  \n ", "WindowTitle": "\t"},
        }
        assert guess_window_title(entry, 0) == "Fallback"

    def test_synthesized_title_uses_one_based_index(self):
        entry = {"PersistentState": {"TabStates": [{"TabURL": "https://x.example/"}]}}
        assert guess_window_title(entry, 0) == "Window 1"
        assert guess_window_title(entry, 4) == "Window 5"

    def test_custom_keys(self):
        keys = RecoveryKeys(persistent_state_key="State", window_title_key="Caption")
        entry = {"State": {"Caption": "Custom"}}
        assert guess_window_title(entry, 0, keys) == "Custom"


class TestExtractClosedDate:
    """Test the close-date search order."""

    def test_entry_key_first(self):
        entry = {
            "ClosedDate": LATE,
            "LastClosedDate": EARLY,
            "PersistentState": {"DateClosed": LATE},
        }
        assert extract_closed_date(entry) == EARLY

    def test_persistent_state_keys_second(self):
        entry = {"Other": LATE, "PersistentState": {"Meta": EARLY, "DateClosed": LATE}}
        assert extract_closed_date(entry) == LATE

    def test_any_date_in_persistent_state_third(self):
        entry = {"Other": LATE, "PersistentState": {"TabStates": [{"LastVisitTime": EARLY}]}}
        assert extract_closed_date(entry) == EARLY

    def test_any_date_in_entry_last(self):
        entry = {"PersistentState": {"Flags": 1}, "Meta": [{"When": LATE}]}
        assert extract_closed_date(entry) == LATE

    def test_non_date_values_under_date_keys_are_ignored(self):
        entry = {"DateClosed": 760000000.0, "ClosedDate": "yesterday"}
        assert extract_closed_date(entry) is None

    def test_no_date(self):
        assert extract_closed_date({"PersistentState": {}}) is None


class TestFindFirstDate:
    """Test depth-first date search."""

    def test_depth_first_in_stored_order(self):
        tree = {"a": {"b": [1, {"c": EARLY}]}, "d": LATE}
        assert find_first_date(tree) == EARLY

    def test_depth_ceiling(self):
        tree = {"a": {"b": {"c": EARLY}}}
        assert find_first_date(tree, max_depth=2) is None
        assert find_first_date(tree, max_depth=3) == EARLY


class TestAssembleWindow:
    """Test full window assembly."""

    def test_assembles_all_fields(self):
        entry = {
            "PersistentState": {
                "WindowTitle": "Reading",
                "DateClosed": EARLY,
                "TabStates": [
                    {"TabURL": "https://a.example/", "TabTitle": "A"},
                    {"TabURL": "https://b.example/"},
                ],
            }
        }

        window = assemble_window(entry, 2)

        assert window.title == "Reading"
        assert window.closed_at == EARLY
        assert window.urls == ("https://a.example/", "https://b.example/")
        assert window.tabs[1].title is None

    def test_empty_tabs_are_returned_not_filtered(self):
        window = assemble_window({"Title": "Nothing"}, 0)
        assert window.tabs == ()
        assert window.title == "Nothing"
