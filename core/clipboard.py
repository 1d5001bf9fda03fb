"""
clipboard.py - Copy generated passwords to the system clipboard.

Tk already owns the clipboard for us, so this is a thin wrapper around a
widget's clipboard_clear()/clipboard_append(). Two extras:
- copy() reports success instead of raising, so a flaky clipboard never
  interrupts the generator
- Copied passwords are wiped from the clipboard after a delay
  (15 seconds by default), so they don't linger for the next paste
"""

import logging
import tkinter
from typing import Optional


logger = logging.getLogger(__name__)

DEFAULT_CLEAR_AFTER_MS = 15000


class ClipboardManager:
    """
    Clipboard access through a Tk widget.

    Args:
        widget: Any Tk/customtkinter widget (only its clipboard and
            after() methods are used)
        clear_after_ms: Auto-clear delay after a copy; 0 disables it
    """

    def __init__(self, widget, clear_after_ms: int = DEFAULT_CLEAR_AFTER_MS):
        self.widget = widget
        self.clear_after_ms = clear_after_ms
        self._clear_job: Optional[str] = None

    def is_supported(self) -> bool:
        """Whether the widget can reach the clipboard at all."""
        return all(
            callable(getattr(self.widget, name, None))
            for name in ("clipboard_clear", "clipboard_append")
        )

    def copy(self, text: str) -> bool:
        """
        Put `text` on the clipboard.

        Returns:
            True on success, False for non-string input or a clipboard error
        """
        if not isinstance(text, str) or not self.is_supported():
            return False

        try:
            self.widget.clipboard_clear()
            self.widget.clipboard_append(text)
            self.widget.update()
        except tkinter.TclError as e:
            logger.warning("Clipboard copy failed: %s", e)
            return False

        self._schedule_clear()
        return True

    def clear(self):
        """Empty the clipboard now and cancel any pending auto-clear."""
        self._cancel_clear()
        self._clear_now()

    @property
    def clear_pending(self) -> bool:
        return self._clear_job is not None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _schedule_clear(self):
        self._cancel_clear()
        if self.clear_after_ms > 0:
            self._clear_job = self.widget.after(self.clear_after_ms, self._on_clear_timer)

    def _cancel_clear(self):
        if self._clear_job is not None:
            self.widget.after_cancel(self._clear_job)
            self._clear_job = None

    def _on_clear_timer(self):
        self._clear_job = None
        self._clear_now()

    def _clear_now(self):
        try:
            self.widget.clipboard_clear()
            self.widget.clipboard_append("")
            self.widget.update()
        except tkinter.TclError as e:
            # The window may already be gone on shutdown
            logger.debug("Clipboard clear skipped: %s", e)
