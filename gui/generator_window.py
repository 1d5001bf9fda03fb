"""
generator_window.py - The main generator screen.

Layout, top to bottom:
- Generated password(s) with show/hide and copy buttons
- Strength bar, label and feedback for the first password
- Options: length, character types, custom symbols, extra rules, count
- Generate button
- Recent history with per-row copy and a clear button

The window doesn't generate or score anything itself. It reads the
widgets into a GenerationConfig, hands that to the PasswordGenerator and
shows whatever comes back, including the generator's error message when
the options can't be satisfied.
"""

from dataclasses import replace

import customtkinter as ctk

from core.clipboard import ClipboardManager
from core.history import PasswordHistory
from core.password_gen import GenerationConfig, PasswordGenerator, minimum_length
from core.settings import DEFAULT_LENGTH, MAX_COUNT, MAX_LENGTH, MIN_LENGTH
from core.strength import StrengthMeter
from gui.theme import get_colors, get_strength_color, toggle_mode


HIDDEN_CHAR = "•"


def display_text(password: str, visible: bool) -> str:
    """The password itself, or one bullet per character while hidden."""
    return password if visible else HIDDEN_CHAR * len(password)


class GeneratorWindow(ctk.CTkFrame):
    """
    Generator view.

    Args:
        parent: The app window
        generator: Produces passwords from a GenerationConfig
        meter: Scores the displayed password
        clipboard: Handles copy (and auto-clear)
        history: Receives every generated password
    """

    def __init__(
        self,
        parent: ctk.CTk,
        generator: PasswordGenerator,
        meter: StrengthMeter,
        clipboard: ClipboardManager,
        history: PasswordHistory,
    ):
        C = get_colors()
        super().__init__(parent, fg_color=C["bg_primary"])
        self.generator = generator
        self.meter = meter
        self.clipboard = clipboard
        self.history = history

        self.current_passwords: list[str] = []
        self.password_visible = True
        self.warning_job = None

        self._build_ui()
        self._refresh_history()
        self._bind_shortcuts()

    def _bind_shortcuts(self):
        top = self.winfo_toplevel()
        top.bind("<Control-g>", lambda e: self._generate())
        top.bind("<Return>", lambda e: self._generate())

    def _unbind_shortcuts(self):
        top = self.winfo_toplevel()
        for shortcut in ("<Control-g>", "<Return>"):
            top.unbind(shortcut)

    def _build_ui(self):
        C = get_colors()

        container = ctk.CTkScrollableFrame(self, fg_color="transparent")
        container.pack(fill="both", expand=True, padx=20, pady=20)

        # --- Title row ---
        title_row = ctk.CTkFrame(container, fg_color="transparent")
        title_row.pack(fill="x", pady=(0, 16))

        ctk.CTkLabel(
            title_row,
            text="Password Generator",
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=C["text_primary"],
        ).pack(side="left")

        ctk.CTkButton(
            title_row,
            text="◐",
            width=32,
            height=32,
            font=ctk.CTkFont(size=14),
            fg_color="transparent",
            hover_color=C["bg_hover"],
            text_color=C["text_secondary"],
            command=self._toggle_theme,
        ).pack(side="right")

        # --- Generated Password Display ---
        output_frame = ctk.CTkFrame(
            container,
            fg_color=C["bg_card"],
            corner_radius=10,
            border_width=1,
            border_color=C["border"],
        )
        output_frame.pack(fill="x", pady=(0, 8))

        self.output_label = ctk.CTkLabel(
            output_frame,
            text="Press Generate to create a password",
            font=ctk.CTkFont(family="Courier", size=14),
            text_color=C["text_muted"],
            wraplength=420,
            justify="left",
        )
        self.output_label.pack(padx=16, pady=16)

        output_btns = ctk.CTkFrame(container, fg_color="transparent")
        output_btns.pack(fill="x", pady=(0, 8))

        self.visibility_btn = ctk.CTkButton(
            output_btns,
            text="Hide",
            width=70,
            height=30,
            font=ctk.CTkFont(size=12),
            fg_color=C["bg_card"],
            hover_color=C["bg_hover"],
            border_width=1,
            border_color=C["border"],
            text_color=C["text_primary"],
            command=self._toggle_visibility,
        )
        self.visibility_btn.pack(side="left")

        self.copy_btn = ctk.CTkButton(
            output_btns,
            text="Copy",
            width=70,
            height=30,
            font=ctk.CTkFont(size=12, weight="bold"),
            fg_color=C["copy_btn"],
            hover_color=C["copy_btn_hover"],
            command=self._copy_current,
        )
        self.copy_btn.pack(side="right")

        self.status_label = ctk.CTkLabel(
            output_btns,
            text="",
            font=ctk.CTkFont(size=11),
            text_color=C["text_secondary"],
        )
        self.status_label.pack(side="left", padx=12)

        # --- Strength ---
        self.strength_bar = ctk.CTkProgressBar(
            container,
            height=6,
            corner_radius=3,
            fg_color=C["border"],
            progress_color=C["text_muted"],
        )
        self.strength_bar.pack(fill="x", pady=(0, 2))
        self.strength_bar.set(0)

        self.strength_label = ctk.CTkLabel(
            container,
            text="",
            font=ctk.CTkFont(size=11, weight="bold"),
            text_color=C["text_muted"],
            anchor="w",
        )
        self.strength_label.pack(fill="x")

        self.feedback_label = ctk.CTkLabel(
            container,
            text="",
            font=ctk.CTkFont(size=11),
            text_color=C["text_secondary"],
            anchor="w",
            justify="left",
            wraplength=420,
        )
        self.feedback_label.pack(fill="x", pady=(0, 12))

        # --- Options Card ---
        options_card = ctk.CTkFrame(
            container,
            fg_color=C["bg_card"],
            corner_radius=10,
            border_width=1,
            border_color=C["border"],
        )
        options_card.pack(fill="x", pady=(0, 12))

        options = ctk.CTkFrame(options_card, fg_color="transparent")
        options.pack(padx=16, pady=16, fill="x")

        # Length slider
        length_row = ctk.CTkFrame(options, fg_color="transparent")
        length_row.pack(fill="x", pady=(0, 4))

        ctk.CTkLabel(
            length_row,
            text="Length",
            font=ctk.CTkFont(size=12),
            text_color=C["text_secondary"],
        ).pack(side="left")

        self.length_value_label = ctk.CTkLabel(
            length_row,
            text=str(DEFAULT_LENGTH),
            font=ctk.CTkFont(size=12, weight="bold"),
            text_color=C["text_primary"],
        )
        self.length_value_label.pack(side="right")

        self.length_slider = ctk.CTkSlider(
            options,
            from_=MIN_LENGTH,
            to=MAX_LENGTH,
            number_of_steps=MAX_LENGTH - MIN_LENGTH,
            fg_color=C["border"],
            progress_color=C["accent"],
            button_color=C["accent"],
            button_hover_color=C["accent_hover"],
            command=self._on_length_change,
        )
        self.length_slider.set(DEFAULT_LENGTH)
        self.length_slider.pack(fill="x", pady=(0, 12))

        # Character types (at least one must stay selected)
        self.use_upper = self._checkbox(options, "Uppercase (A-Z)", selected=True)
        self.use_lower = self._checkbox(options, "Lowercase (a-z)", selected=True)
        self.use_numbers = self._checkbox(options, "Numbers (0-9)", selected=True)
        self.use_special = self._checkbox(options, "Special (!@#$%...)", selected=True)
        self.class_checkboxes = [self.use_upper, self.use_lower, self.use_numbers, self.use_special]
        for checkbox in self.class_checkboxes:
            checkbox.configure(command=lambda cb=checkbox: self._on_class_toggle(cb))

        self.custom_special_entry = ctk.CTkEntry(
            options,
            placeholder_text="Custom special characters (optional)",
            font=ctk.CTkFont(size=12),
            height=32,
            fg_color=C["bg_input"],
            border_color=C["border"],
            text_color=C["text_primary"],
        )
        self.custom_special_entry.pack(fill="x", pady=(4, 10))
        self.custom_special_entry.bind("<FocusOut>", lambda e: self._check_minimum_length())

        # Extra rules
        self.exclude_similar = self._checkbox(options, "Exclude similar (l, I, 1, O, 0)")
        self.allow_duplicates = self._checkbox(options, "Allow duplicate characters", selected=True)
        self.use_spaces = self._checkbox(options, "Include spaces")
        self.auto_copy = self._checkbox(options, "Copy automatically after generating")
        for checkbox in (self.exclude_similar, self.use_spaces):
            checkbox.configure(command=self._check_minimum_length)

        # Count
        count_row = ctk.CTkFrame(options, fg_color="transparent")
        count_row.pack(fill="x", pady=(10, 0))

        ctk.CTkLabel(
            count_row,
            text=f"How many (1-{MAX_COUNT})",
            font=ctk.CTkFont(size=12),
            text_color=C["text_secondary"],
        ).pack(side="left")

        self.count_entry = ctk.CTkEntry(
            count_row,
            width=60,
            height=30,
            font=ctk.CTkFont(size=12),
            fg_color=C["bg_input"],
            border_color=C["border"],
            text_color=C["text_primary"],
        )
        self.count_entry.insert(0, "1")
        self.count_entry.pack(side="right")

        # --- Generate ---
        ctk.CTkButton(
            container,
            text="Generate",
            font=ctk.CTkFont(size=14, weight="bold"),
            height=42,
            fg_color=C["accent"],
            hover_color=C["accent_hover"],
            command=self._generate,
        ).pack(fill="x", pady=(0, 16))

        # --- History ---
        history_header = ctk.CTkFrame(container, fg_color="transparent")
        history_header.pack(fill="x", pady=(0, 6))

        ctk.CTkLabel(
            history_header,
            text=f"Recent (last {self.history.max_size})",
            font=ctk.CTkFont(size=14, weight="bold"),
            text_color=C["text_primary"],
        ).pack(side="left")

        ctk.CTkButton(
            history_header,
            text="Clear",
            width=60,
            height=26,
            font=ctk.CTkFont(size=12),
            fg_color="transparent",
            hover_color=C["bg_hover"],
            text_color=C["delete_btn"],
            command=self._clear_history,
        ).pack(side="right")

        self.history_frame = ctk.CTkFrame(
            container,
            fg_color=C["bg_card"],
            corner_radius=10,
            border_width=1,
            border_color=C["border"],
        )
        self.history_frame.pack(fill="x")

    def _checkbox(self, parent, text: str, selected: bool = False) -> ctk.CTkCheckBox:
        C = get_colors()
        checkbox = ctk.CTkCheckBox(
            parent,
            text=text,
            font=ctk.CTkFont(size=12),
            text_color=C["text_secondary"],
            fg_color=C["accent"],
            hover_color=C["accent_hover"],
        )
        if selected:
            checkbox.select()
        checkbox.pack(anchor="w", pady=2)
        return checkbox

    # ------------------------------------------------------------------
    # Event Handlers
    # ------------------------------------------------------------------

    def _on_length_change(self, value):
        length = int(value)
        required = minimum_length(self._read_classes())
        if length < required:
            # One guaranteed character per ticked class has to fit
            length = required
            self.length_slider.set(length)
            self._show_status(f"Length must be at least {required} for the selected types", warning=True)
        self.length_value_label.configure(text=str(length))

    def _check_minimum_length(self):
        self._on_length_change(self.length_slider.get())

    def _on_class_toggle(self, checkbox: ctk.CTkCheckBox):
        """Refuse to untick the last character type."""
        if not any(cb.get() for cb in self.class_checkboxes):
            checkbox.select()
            self._show_status("At least one character type must be selected", warning=True)
            return
        self._check_minimum_length()

    def _toggle_visibility(self):
        self.password_visible = not self.password_visible
        self.visibility_btn.configure(text="Hide" if self.password_visible else "Show")
        self._render_output()
        self._refresh_history()

    def _toggle_theme(self):
        new_mode = toggle_mode()
        ctk.set_appearance_mode(new_mode)
        self._unbind_shortcuts()
        for child in self.winfo_children():
            child.destroy()
        self.configure(fg_color=get_colors()["bg_primary"])
        self._build_ui()
        self._refresh_history()
        self._bind_shortcuts()
        self.visibility_btn.configure(text="Hide" if self.password_visible else "Show")
        self._render_output()
        if self.current_passwords:
            self._render_strength(self.current_passwords[0])

    # ------------------------------------------------------------------
    # Generate
    # ------------------------------------------------------------------

    def _read_classes(self) -> GenerationConfig:
        """The ticked options alone, with default length and count."""
        return GenerationConfig(
            include_uppercase=bool(self.use_upper.get()),
            include_lowercase=bool(self.use_lower.get()),
            include_numbers=bool(self.use_numbers.get()),
            include_special_chars=bool(self.use_special.get()),
            include_spaces=bool(self.use_spaces.get()),
            custom_special_chars=self.custom_special_entry.get() or None,
            exclude_similar_chars=bool(self.exclude_similar.get()),
            allow_duplicate_chars=bool(self.allow_duplicates.get()),
        )

    def _read_config(self) -> GenerationConfig:
        return replace(
            self._read_classes(),
            length=int(self.length_slider.get()),
            count=self._read_count(),
        )

    def _read_count(self) -> int:
        raw = self.count_entry.get().strip()
        try:
            count = int(raw)
        except ValueError:
            count = 0
        if 1 <= count <= MAX_COUNT:
            return count

        self.count_entry.delete(0, "end")
        self.count_entry.insert(0, "1")
        self._show_status(f"Count must be between 1 and {MAX_COUNT}, using 1", warning=True)
        return 1

    def _generate(self, *args):
        """Generate with the current options and update everything."""
        C = get_colors()
        try:
            passwords = self.generator.generate(self._read_config())
        except ValueError as e:
            self.current_passwords = []
            self.output_label.configure(text=str(e), text_color=C["error"])
            self.strength_bar.set(0)
            self.strength_bar.configure(progress_color=C["text_muted"])
            self.strength_label.configure(text="", text_color=C["text_muted"])
            self.feedback_label.configure(text="")
            return

        self.current_passwords = passwords
        self._render_output()
        self._render_strength(passwords[0])

        for password in passwords:
            self.history.add(password)
        self._refresh_history()

        if self.auto_copy.get():
            self._copy_current()

    def _render_output(self):
        C = get_colors()
        if not self.current_passwords:
            return
        lines = [display_text(p, self.password_visible) for p in self.current_passwords]
        self.output_label.configure(text="\n".join(lines), text_color=C["success"])

    def _render_strength(self, password: str):
        result = self.meter.evaluate(password)
        color = get_strength_color(result.label)
        self.strength_bar.set(result.score / 100.0)
        self.strength_bar.configure(progress_color=color)
        self.strength_label.configure(
            text=f"{result.label}  •  {result.score}/100",
            text_color=color,
        )
        self.feedback_label.configure(text="\n".join(f"• {line}" for line in result.feedback))

    # ------------------------------------------------------------------
    # Clipboard
    # ------------------------------------------------------------------

    def _copy_current(self):
        if not self.current_passwords:
            self._show_status("Nothing to copy yet", warning=True)
            return
        self._copy(self.current_passwords[0])

    def _copy(self, password: str):
        if self.clipboard.copy(password):
            seconds = self.clipboard.clear_after_ms // 1000
            suffix = f" (clears in {seconds}s)" if seconds else ""
            self._show_status(f"Copied to clipboard{suffix}")
        else:
            self._show_status("Couldn't copy to clipboard", warning=True)

    def _show_status(self, message: str, warning: bool = False):
        C = get_colors()
        self.status_label.configure(
            text=message,
            text_color=C["warning"] if warning else C["success"],
        )
        if self.warning_job:
            self.after_cancel(self.warning_job)
        self.warning_job = self.after(3000, self._clear_status)

    def _clear_status(self):
        self.status_label.configure(text="")
        self.warning_job = None

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def _refresh_history(self):
        C = get_colors()
        for child in self.history_frame.winfo_children():
            child.destroy()

        entries = self.history.get_all()
        if not entries:
            ctk.CTkLabel(
                self.history_frame,
                text="No passwords generated yet",
                font=ctk.CTkFont(size=12),
                text_color=C["text_muted"],
            ).pack(padx=16, pady=12)
            return

        # Newest first
        for password in reversed(entries):
            row = ctk.CTkFrame(self.history_frame, fg_color="transparent")
            row.pack(fill="x", padx=10, pady=2)

            ctk.CTkLabel(
                row,
                text=display_text(password, self.password_visible),
                font=ctk.CTkFont(family="Courier", size=12),
                text_color=C["text_primary"],
                anchor="w",
            ).pack(side="left", fill="x", expand=True)

            ctk.CTkButton(
                row,
                text="Copy",
                width=50,
                height=24,
                font=ctk.CTkFont(size=11),
                fg_color=C["copy_btn"],
                hover_color=C["copy_btn_hover"],
                command=lambda p=password: self._copy(p),
            ).pack(side="right")

    def _clear_history(self):
        self.history.clear()
        self._refresh_history()

    def shutdown(self):
        """Called by the app on close."""
        if self.warning_job:
            self.after_cancel(self.warning_job)
            self.warning_job = None
        self._unbind_shortcuts()
        self.clipboard.clear()
