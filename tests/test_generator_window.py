"""Tests for the window's display helpers (no widgets are created)."""

from gui.generator_window import HIDDEN_CHAR, display_text


def test_visible_password_is_shown_as_is():
    assert display_text("kX9#mP2$", visible=True) == "kX9#mP2$"


def test_hidden_password_is_masked_per_character():
    assert display_text("kX9#mP2$", visible=False) == HIDDEN_CHAR * 8


def test_hidden_history_entries_reveal_nothing():
    entries = ["first pw", "Tr7$kPx9Qm2!fLwZ"]
    masked = [display_text(p, visible=False) for p in entries]
    assert all(set(m) == {HIDDEN_CHAR} for m in masked)
    assert [len(m) for m in masked] == [8, 16]
