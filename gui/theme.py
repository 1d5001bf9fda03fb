"""
theme.py - Colors and fonts for the generator window, with dark/light mode.

Every widget asks get_colors() for its palette, so toggle_mode() followed
by a rebuild switches the whole window at once.
"""

# Current mode: "dark" or "light"
_current_mode = "dark"

DARK = {
    # Backgrounds
    "bg_primary": "#0f1117",
    "bg_card": "#1c2333",
    "bg_input": "#232b3e",
    "bg_hover": "#2a3346",

    # Accent
    "accent": "#4f8ff7",
    "accent_hover": "#3a7ae0",

    # Status
    "success": "#3fb950",
    "error": "#f85149",
    "warning": "#d29922",

    # Text
    "text_primary": "#e6edf3",
    "text_secondary": "#8b949e",
    "text_muted": "#484f58",

    # Borders
    "border": "#30363d",

    # Strength meter
    "strength_very_weak": "#f85149",
    "strength_weak": "#f0883e",
    "strength_medium": "#d29922",
    "strength_strong": "#3fb950",
    "strength_very_strong": "#56d364",

    # Buttons
    "copy_btn": "#238636",
    "copy_btn_hover": "#2ea043",
    "delete_btn": "#da3633",
    "delete_btn_hover": "#f85149",
}

LIGHT = {
    # Backgrounds
    "bg_primary": "#ffffff",
    "bg_card": "#ffffff",
    "bg_input": "#f6f8fa",
    "bg_hover": "#eaeef2",

    # Accent
    "accent": "#0969da",
    "accent_hover": "#0550ae",

    # Status
    "success": "#1a7f37",
    "error": "#cf222e",
    "warning": "#9a6700",

    # Text
    "text_primary": "#1f2328",
    "text_secondary": "#656d76",
    "text_muted": "#8c959f",

    # Borders
    "border": "#d0d7de",

    # Strength meter
    "strength_very_weak": "#cf222e",
    "strength_weak": "#bc4c00",
    "strength_medium": "#9a6700",
    "strength_strong": "#1a7f37",
    "strength_very_strong": "#116329",

    # Buttons
    "copy_btn": "#1a7f37",
    "copy_btn_hover": "#116329",
    "delete_btn": "#cf222e",
    "delete_btn_hover": "#a40e26",
}


def get_colors() -> dict:
    """Get the current theme's color palette."""
    return DARK if _current_mode == "dark" else LIGHT


def get_mode() -> str:
    """Get the current theme mode."""
    return _current_mode


def toggle_mode() -> str:
    """Toggle between dark and light mode. Returns the new mode."""
    global _current_mode
    _current_mode = "light" if _current_mode == "dark" else "dark"
    return _current_mode


def get_strength_color(strength_label: str) -> str:
    """
    Theme color for a strength label ("Very Weak" .. "Very Strong").

    The meter's own hex colors are tuned for a white page; these track the
    current palette instead. Unknown labels get the muted text color.
    """
    colors = get_colors()
    mapping = {
        "Very Weak": colors["strength_very_weak"],
        "Weak": colors["strength_weak"],
        "Medium": colors["strength_medium"],
        "Strong": colors["strength_strong"],
        "Very Strong": colors["strength_very_strong"],
    }
    return mapping.get(strength_label, colors["text_muted"])
