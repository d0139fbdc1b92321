"""
Path resolution utilities for reports module.
"""

from __future__ import annotations

from pathlib import Path


def get_reports_dir() -> Path:
    """Get the reports package root directory."""
    return Path(__file__).parent


def get_templates_dir() -> Path:
    """Get the directory holding the Jinja2 templates."""
    return get_reports_dir() / "templates"
