"""
main.py - Application entry point for the password generator.

This is the orchestrator. It:
1. Reads settings (defaults + environment overrides)
2. Builds the generator, strength meter, clipboard and history
3. Shows the generator window
4. On close, wipes the clipboard and closes the history database
"""

import logging
import sys

import customtkinter as ctk

from core.clipboard import ClipboardManager
from core.encryption import load_or_create_key
from core.history import PasswordHistory
from core.password_gen import PasswordGenerator
from core.settings import APP_NAME, APP_VERSION, Settings
from core.strength import StrengthMeter
from gui.generator_window import GeneratorWindow
from gui.theme import get_colors


logger = logging.getLogger(__name__)


def build_history(settings: Settings) -> PasswordHistory:
    """Encrypted on-disk history, or in-memory if persistence is off or the key is unusable."""
    if not settings.persist_history:
        return PasswordHistory(max_size=settings.history_size)

    try:
        key = load_or_create_key(settings.key_path)
    except (OSError, ValueError) as e:
        logger.warning("History key unavailable (%s), history will not be saved", e)
        return PasswordHistory(max_size=settings.history_size)

    return PasswordHistory(max_size=settings.history_size, db_path=settings.history_path, key=key)


class PasswordGeneratorApp(ctk.CTk):
    """Main application window."""

    def __init__(self, settings: Settings):
        super().__init__()

        # Window setup
        self.title(f"{APP_NAME} {APP_VERSION}")
        self.geometry("520x760")
        self.minsize(460, 600)
        self.configure(fg_color=get_colors()["bg_primary"])

        # Make sure copied passwords don't outlive the app
        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self.history = build_history(settings)
        self.clipboard = ClipboardManager(self, clear_after_ms=settings.clipboard_clear_ms)

        self.window = GeneratorWindow(
            parent=self,
            generator=PasswordGenerator(),
            meter=StrengthMeter(),
            clipboard=self.clipboard,
            history=self.history,
        )
        self.window.pack(fill="both", expand=True)

    def _on_close(self):
        """Clean shutdown: clear the clipboard, close history, destroy the window."""
        self.window.shutdown()
        self.history.close()
        self.destroy()


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctk.set_appearance_mode("dark")

    try:
        settings = Settings.from_env()
        app = PasswordGeneratorApp(settings)
        app.mainloop()
    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)
    except Exception as e:
        print(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
