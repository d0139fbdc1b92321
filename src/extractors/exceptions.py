"""
Exceptions for extractor modules.
"""

from pathlib import Path


class ExtractorError(Exception):
    """Base exception for extractor errors."""
    pass


class PlistLoadError(ExtractorError):
    """Raised when a plist cannot be read or deserialized."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")


class MissingToolError(ExtractorError):
    """Raised when required external tool is not found."""

    def __init__(self, tool_name: str, install_hint: str = ""):
        self.tool_name = tool_name
        self.install_hint = install_hint
        message = f"Required tool '{tool_name}' not found"
        if install_hint:
            message += f"\n{install_hint}"
        super().__init__(message)


class RestoreFailedError(ExtractorError):
    """Raised when Safari does not accept a restore request."""
    pass
