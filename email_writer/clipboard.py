"""Clipboard targets for the copy buttons."""

from __future__ import annotations

from typing import Protocol


class ClipboardError(RuntimeError):
    """Raised when text cannot be placed on the clipboard."""


class Clipboard(Protocol):
    """Anything that can receive copied text."""

    def write_text(self, text: str) -> None:
        ...


class BrowserClipboard:
    """Holds copied text until the page writes it with navigator.clipboard.

    The server has no access to the visitor's clipboard, so the copy
    endpoint hands the captured text back in its response.
    """

    def __init__(self) -> None:
        self.last_text: str | None = None

    def write_text(self, text: str) -> None:
        if not isinstance(text, str):
            raise ClipboardError("Only text can be copied.")
        self.last_text = text
