"""
strength.py - Password strength meter.

The score is the sum of four independent checks:
- Length (0-30): longer is better, in steps at 8, 12 and 16 characters
- Variety (0-30): points for each kind of character that shows up
- Patterns (0-20): penalties for runs like "abc"/"321" and "aaa"
- Dictionary (0-20): zero if it's (or contains) a well-known password

Total 0-100, which maps onto five levels from Very Weak to Very Strong.

This is a heuristic, not a cracking estimate. It's deterministic and fast,
which is what a live strength bar needs.
"""

import os
import re
from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Iterable, Optional


DEFAULT_DICTIONARY_PATH = os.path.join(os.path.dirname(__file__), "data", "common_passwords.txt")

# Dictionary entries shorter than this only count on an exact match.
# Fragments like "pass" do; "123" or "abc" would flag half of all passwords.
MIN_SUBSTRING_LENGTH = 4

_LOWER_RE = re.compile(r"[a-z]")
_UPPER_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SPECIAL_RE = re.compile(r"[^a-zA-Z0-9]")

REQUIRED_FEEDBACK = "Password is required"
EXCELLENT_FEEDBACK = "Excellent password strength!"


class StrengthLevel(IntEnum):
    VERY_WEAK = 0
    WEAK = 1
    MEDIUM = 2
    STRONG = 3
    VERY_STRONG = 4


LEVEL_COLORS = {
    StrengthLevel.VERY_WEAK: "#dc3545",     # red
    StrengthLevel.WEAK: "#fd7e14",          # orange
    StrengthLevel.MEDIUM: "#ffc107",        # yellow
    StrengthLevel.STRONG: "#90ee90",        # light green
    StrengthLevel.VERY_STRONG: "#28a745",   # dark green
}

LEVEL_LABELS = {
    StrengthLevel.VERY_WEAK: "Very Weak",
    StrengthLevel.WEAK: "Weak",
    StrengthLevel.MEDIUM: "Medium",
    StrengthLevel.STRONG: "Strong",
    StrengthLevel.VERY_STRONG: "Very Strong",
}

UNKNOWN_COLOR = "#6c757d"
UNKNOWN_LABEL = "Unknown"


@dataclass(frozen=True)
class StrengthResult:
    score: int
    level: StrengthLevel
    length_score: int
    variety_score: int
    pattern_score: int
    dictionary_score: int
    feedback: tuple[str, ...]
    color: str
    label: str

    def to_dict(self) -> dict:
        """Plain-dict version (level by name) for display and storage code."""
        data = asdict(self)
        data["level"] = self.level.name
        data["feedback"] = list(self.feedback)
        return data


def load_common_passwords(path: str = DEFAULT_DICTIONARY_PATH) -> frozenset[str]:
    """
    Read a common-password list: one entry per line.

    Blank lines and lines starting with "#" are skipped. Everything is
    lower-cased, since the meter compares case-insensitively.

    Raises:
        OSError: If the file can't be read
    """
    with open(path, encoding="utf-8") as f:
        return frozenset(
            line.strip().lower()
            for line in f
            if line.strip() and not line.lstrip().startswith("#")
        )


def level_for_score(score: int) -> StrengthLevel:
    """Map a 0-100 score onto a level (upper bounds are inclusive)."""
    if score <= 20:
        return StrengthLevel.VERY_WEAK
    if score <= 40:
        return StrengthLevel.WEAK
    if score <= 60:
        return StrengthLevel.MEDIUM
    if score <= 80:
        return StrengthLevel.STRONG
    return StrengthLevel.VERY_STRONG


def color_for_level(level: StrengthLevel) -> str:
    # Every level is in the table; the fallback only guards bad input.
    return LEVEL_COLORS.get(level, UNKNOWN_COLOR)


def label_for_level(level: StrengthLevel) -> str:
    return LEVEL_LABELS.get(level, UNKNOWN_LABEL)


def has_sequential_characters(password: str) -> bool:
    """True if any 3 neighbours go up or down by one code point (abc, 321)."""
    for i in range(len(password) - 2):
        a, b, c = ord(password[i]), ord(password[i + 1]), ord(password[i + 2])
        if b == a + 1 and c == b + 1:
            return True
        if b == a - 1 and c == b - 1:
            return True
    return False


def has_repeated_characters(password: str) -> bool:
    """True if any character appears 3 times in a row (aaa, 111)."""
    for i in range(len(password) - 2):
        if password[i] == password[i + 1] == password[i + 2]:
            return True
    return False


class StrengthMeter:
    """
    Scores passwords against the heuristic above.

    The common-password list is loaded once and frozen, so a single meter
    can be shared by the whole app (and across threads).

    Usage:
        meter = StrengthMeter()
        result = meter.evaluate("Tr7$kPx9Qm2!fLwZ")
        result.label  # "Very Strong"
    """

    def __init__(self, common_passwords: Optional[Iterable[str]] = None):
        if common_passwords is None:
            common_passwords = load_common_passwords()
        self.common_passwords = frozenset(p.lower() for p in common_passwords)

    def evaluate(self, password) -> StrengthResult:
        """
        Evaluate a password.

        Never raises: a missing, empty or non-string password gets a zero
        score with a single "Password is required" message.
        """
        if not password or not isinstance(password, str):
            return self._empty_result()

        length_score = self.evaluate_length(password)
        variety_score = self.evaluate_variety(password)
        pattern_score = self.evaluate_patterns(password)
        dictionary_score = self.evaluate_dictionary(password)

        score = length_score + variety_score + pattern_score + dictionary_score
        level = level_for_score(score)
        feedback = self._generate_feedback(
            password, length_score, variety_score, pattern_score, dictionary_score
        )

        return StrengthResult(
            score=score,
            level=level,
            length_score=length_score,
            variety_score=variety_score,
            pattern_score=pattern_score,
            dictionary_score=dictionary_score,
            feedback=tuple(feedback),
            color=color_for_level(level),
            label=label_for_level(level),
        )

    # ------------------------------------------------------------------
    # Sub-scores
    # ------------------------------------------------------------------

    @staticmethod
    def evaluate_length(password: str) -> int:
        length = len(password)
        if length < 8:
            return 0
        if length <= 11:
            return 10
        if length <= 15:
            return 20
        return 30

    @staticmethod
    def evaluate_variety(password: str) -> int:
        score = 0
        if _LOWER_RE.search(password):
            score += 7
        if _UPPER_RE.search(password):
            score += 7
        if _DIGIT_RE.search(password):
            score += 8
        if _SPECIAL_RE.search(password):
            score += 8
        return score

    @staticmethod
    def evaluate_patterns(password: str) -> int:
        score = 20
        if has_sequential_characters(password):
            score -= 10
        if has_repeated_characters(password):
            score -= 10
        return score

    def evaluate_dictionary(self, password: str) -> int:
        """0 if the password is, or contains, a common password; else 20."""
        lowered = password.lower()

        if lowered in self.common_passwords:
            return 0

        if any(
            len(common) >= MIN_SUBSTRING_LENGTH and common in lowered
            for common in self.common_passwords
        ):
            return 0

        return 20

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _generate_feedback(password, length_score, variety_score, pattern_score, dictionary_score):
        feedback = []

        if length_score < 30:
            if len(password) < 8:
                feedback.append("Password is too short. Use at least 8 characters.")
            elif len(password) < 12:
                feedback.append("Consider using 12 or more characters for better security.")
            elif len(password) < 16:
                feedback.append("Good length. Consider 16+ characters for maximum security.")

        if variety_score < 30:
            missing = []
            if not _LOWER_RE.search(password):
                missing.append("lowercase letters")
            if not _UPPER_RE.search(password):
                missing.append("uppercase letters")
            if not _DIGIT_RE.search(password):
                missing.append("numbers")
            if not _SPECIAL_RE.search(password):
                missing.append("special characters")
            if missing:
                feedback.append(f"Add {', '.join(missing)} for better variety.")

        if pattern_score < 20:
            if has_sequential_characters(password):
                feedback.append("Avoid sequential characters (abc, 123, etc.).")
            if has_repeated_characters(password):
                feedback.append("Avoid repeated characters (aaa, 111, etc.).")

        if dictionary_score == 0:
            feedback.append("This is a common password. Use something more unique.")

        if not feedback:
            feedback.append(EXCELLENT_FEEDBACK)

        return feedback

    @staticmethod
    def _empty_result() -> StrengthResult:
        level = StrengthLevel.VERY_WEAK
        return StrengthResult(
            score=0,
            level=level,
            length_score=0,
            variety_score=0,
            pattern_score=0,
            dictionary_score=0,
            feedback=(REQUIRED_FEEDBACK,),
            color=color_for_level(level),
            label=label_for_level(level),
        )
