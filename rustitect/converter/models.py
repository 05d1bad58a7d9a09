"""Models for the document conversion subsystem."""

from __future__ import annotations

from enum import Enum


class ConversionError(Exception):
    """Raised when pandoc cannot be started, fails, or yields unusable output.

    ``stderr`` carries whatever pandoc wrote to its error stream.
    """

    def __init__(self, message: str, stderr: str = "") -> None:
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"{message}{detail}")


class PandocFormat(str, Enum):
    """Format names as pandoc's -f/-t flags expect them."""

    MARKDOWN = "markdown"
    ASCIIDOC = "asciidoc"
