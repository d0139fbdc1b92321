"""
Browser extractors organized by browser family.

Structure:
    browser/
    └── safari/      # Safari (WebKit engine, macOS only)
"""

from . import safari

__all__ = ['safari']
