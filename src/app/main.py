from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import defaultdict
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from core.app_version import get_app_version
from core.config import AppConfig, ConfigurationError, default_config_dir, load_app_config
from core.logging import configure_logging, get_logger
from extractors.exceptions import ExtractorError
from extractors.browser.safari import default_recently_closed_path, find_recently_closed_plist
from extractors.browser.safari.recently_closed import (
    RecoveryKeys,
    SafariOpener,
    WindowRecord,
    build_applescript,
    build_restore_groups,
    parse_recently_closed_windows,
    sort_by_recency,
    summarize_restore,
)
from reports.recently_closed import render_html, render_text, to_json_payload

LOGGER = get_logger("app.main")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_tab_position(value: str) -> Tuple[int, int]:
    """argparse type for ``W:T`` (1-based window and tab numbers)."""
    window, sep, tab = value.partition(":")
    try:
        if not sep:
            raise ValueError(value)
        return int(window), int(tab)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WINDOW:TAB, got '{value}'") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safari-tab-restore",
        description="List and reopen recently closed Safari windows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  safari-tab-restore list                          # Newest closed window first
  safari-tab-restore list --format html -o out.html
  safari-tab-restore restore --window 1 --window 3
  safari-tab-restore restore --tab 2:1 --tab 2:4   # Two tabs of window 2
  safari-tab-restore restore --all --dry-run       # Print the AppleScript only
        """,
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {get_app_version()}")
    parser.add_argument(
        "--config-dir",
        type=Path,
        help="Directory holding config/config.yml and logs/ (default: ~/.config/safari-tab-restore)",
    )
    parser.add_argument("--plist", type=Path, help="Path to RecentlyClosedTabs.plist")
    parser.add_argument(
        "--order",
        choices=("recent", "source"),
        default="recent",
        help="Window order: newest closed first, or as stored in the plist",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Show recoverable windows and tabs")
    list_parser.add_argument("--format", choices=("text", "json", "html"), default="text")
    list_parser.add_argument("--output", "-o", type=Path, help="Write to a file instead of stdout")

    restore_parser = subparsers.add_parser("restore", help="Reopen windows in Safari")
    selection = restore_parser.add_mutually_exclusive_group(required=True)
    selection.add_argument("--all", action="store_true", help="Restore every recovered window")
    selection.add_argument(
        "--window",
        type=int,
        action="append",
        metavar="N",
        help="Window number from 'list' (repeatable)",
    )
    selection.add_argument(
        "--tab",
        type=parse_tab_position,
        action="append",
        metavar="W:T",
        help="Tab T of window W from 'list' (repeatable); windows reopen with only these tabs",
    )
    restore_parser.add_argument(
        "--force",
        action="store_true",
        help="Skip the confirmation threshold for opening many windows",
    )
    restore_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the AppleScript instead of running it",
    )
    return parser


def resolve_plist_path(args: argparse.Namespace, config: AppConfig) -> Path:
    """Command line beats config; otherwise the first existing Safari location."""
    if args.plist is not None:
        return args.plist.expanduser()
    if config.extraction.plist_path is not None:
        return config.extraction.plist_path
    return find_recently_closed_plist() or default_recently_closed_path()


def load_windows(plist_path: Path, order: str, config: AppConfig) -> List[WindowRecord]:
    keys = RecoveryKeys.from_config(config.heuristics)
    windows = parse_recently_closed_windows(plist_path, keys, config.extraction.max_depth)
    if order == "recent":
        windows = sort_by_recency(windows)
    return windows


def run_list(args: argparse.Namespace, windows: Sequence[WindowRecord], plist_path: Path) -> int:
    if args.format == "json":
        content = json.dumps(to_json_payload(windows), indent=2, ensure_ascii=False)
    elif args.format == "html":
        content = render_html(windows, source=str(plist_path))
    else:
        content = render_text(windows)

    if args.output is not None:
        try:
            args.output.write_text(content + "\n", encoding="utf-8")
        except OSError as exc:
            LOGGER.error("Could not write %s: %s", args.output, exc.strerror or exc)
            return EXIT_FAILURE
        LOGGER.info("Wrote %s", args.output)
    else:
        print(content)
    return EXIT_OK


def run_restore(args: argparse.Namespace, config: AppConfig, windows: Sequence[WindowRecord]) -> int:
    if not windows:
        print("No windows or tabs detected in the recently closed list.", file=sys.stderr)
        return EXIT_USAGE

    selected = None
    selected_tabs = None
    if args.tab:
        selected_tabs = defaultdict(set)
        for window_position, tab_position in args.tab:
            selected_tabs[window_position].add(tab_position)
    elif not args.all:
        selected = set(args.window)
    try:
        groups = build_restore_groups(windows, selected, selected_tabs)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_USAGE

    threshold = config.restore.confirm_window_threshold
    if len(groups) > threshold and not args.force and not args.dry_run:
        print(
            f"About to open {len(groups)} windows (more than {threshold}). "
            "Re-run with --force to continue.",
            file=sys.stderr,
        )
        return EXIT_USAGE

    if args.dry_run:
        for group in groups:
            print(f"-- {group.title}")
            print(build_applescript(group.urls))
        return EXIT_OK

    opener = SafariOpener(timeout_seconds=config.restore.timeout_seconds)
    opener.restore(groups)
    print(summarize_restore(groups))
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    base_dir = (args.config_dir or default_config_dir()).expanduser()
    try:
        config = load_app_config(base_dir)
    except ConfigurationError as exc:
        configure_logging(None, logging.WARNING)
        LOGGER.error("%s", exc)
        return EXIT_FAILURE

    level = logging.DEBUG if args.verbose else getattr(logging, config.logging.level, logging.INFO)
    configure_logging(
        config.logs_dir,
        level,
        max_bytes=config.logging.log_max_mb * 1024 * 1024,
        backup_count=config.logging.log_backup_count,
    )
    LOGGER.debug("Effective configuration:\n%s", config.to_json())

    try:
        plist_path = resolve_plist_path(args, config)
        windows = load_windows(plist_path, args.order, config)
        if args.command == "list":
            return run_list(args, windows, plist_path)
        return run_restore(args, config, windows)
    except ExtractorError as exc:
        LOGGER.error("%s", exc)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nCancelled by user", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
