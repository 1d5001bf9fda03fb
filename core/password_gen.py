"""
password_gen.py - Secure password generator.

How this works:
1. The caller describes what they want in a GenerationConfig
   (length, which character classes, and a few constraints)
2. We build one character set per enabled class, then join them into the pool
3. Every enabled class gets one guaranteed character (with duplicates off,
   a class whose characters an earlier seed already used is skipped)
4. The rest of the password is filled from the full pool
5. A Fisher-Yates shuffle hides which positions were the guaranteed ones

Where does the randomness come from?
Everything goes through secure_random_int(), which reads raw bytes from
os.urandom (the OS's cryptographic RNG) and uses rejection sampling so
every index is equally likely. A plain `value % n` would favor the low
indexes whenever n doesn't divide 2**32 evenly.

Never pass a non-cryptographic source (like `random.randbytes`) as
`random_bytes`. The generator can't tell the difference, but the
passwords stop being secret.
"""

import os
import string
from dataclasses import dataclass
from typing import Callable, Optional


# Character sets
UPPERCASE = string.ascii_uppercase      # A-Z
LOWERCASE = string.ascii_lowercase      # a-z
NUMBERS = string.digits                 # 0-9
DEFAULT_SPECIAL = "!@#$%^&*()_+-=[]{}|;:,.<>?"
SPACE = " "

# Glyphs that are easy to confuse when read or typed by hand
SIMILAR_CHARS = "lI1O0"

# Raw draws are 32-bit unsigned words
RANDOM_WORD_BYTES = 4
RANDOM_WORD_RANGE = 2 ** 32

RandomBytes = Callable[[int], bytes]


class ConfigurationError(ValueError):
    """The configuration can't produce a password that meets its own rules."""


class EmptyPoolError(ConfigurationError):
    """No character class is enabled (or all were filtered to nothing)."""


class UniquenessError(ConfigurationError):
    """Not enough distinct characters to satisfy the no-duplicates rule."""


@dataclass(frozen=True)
class GenerationConfig:
    """Everything the generator needs to know for one request."""

    length: int = 16
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_special_chars: bool = True
    include_spaces: bool = False
    custom_special_chars: Optional[str] = None
    exclude_similar_chars: bool = False
    allow_duplicate_chars: bool = True
    count: int = 1


def secure_random_int(max_value: int, random_bytes: RandomBytes = os.urandom) -> int:
    """
    Return a uniformly distributed integer in [0, max_value).

    Reads 32-bit words from `random_bytes` and throws away any word that
    falls in the incomplete last block of size `max_value`, so that every
    result has exactly the same number of raw words mapping onto it.

    Args:
        max_value: Exclusive upper bound (1 .. 2**32)
        random_bytes: Callable returning n cryptographically random bytes

    Raises:
        ValueError: If max_value is out of range
    """
    if max_value < 1 or max_value > RANDOM_WORD_RANGE:
        raise ValueError(f"max_value must be between 1 and {RANDOM_WORD_RANGE}, got {max_value}.")

    limit = (RANDOM_WORD_RANGE // max_value) * max_value
    while True:
        value = int.from_bytes(random_bytes(RANDOM_WORD_BYTES), "big")
        if value < limit:
            return value % max_value


def exclude_similar_characters(chars: str) -> str:
    """Strip the ambiguous glyphs (l, I, 1, O, 0) from a character set."""
    return "".join(c for c in chars if c not in SIMILAR_CHARS)


def get_character_classes(config: GenerationConfig) -> list[str]:
    """
    Build the filtered character set of every enabled class.

    Classes that end up empty after filtering (e.g. a custom special set
    made only of "0") are left out entirely, so they neither feed the pool
    nor ask for a guaranteed character.
    """
    classes = []

    if config.include_uppercase:
        classes.append(UPPERCASE)
    if config.include_lowercase:
        classes.append(LOWERCASE)
    if config.include_numbers:
        classes.append(NUMBERS)
    if config.include_special_chars:
        # An empty override means "use the defaults", same as None
        classes.append(config.custom_special_chars or DEFAULT_SPECIAL)
    if config.include_spaces:
        classes.append(SPACE)

    if config.exclude_similar_chars:
        classes = [exclude_similar_characters(chars) for chars in classes]

    return [chars for chars in classes if chars]


def get_character_set(config: GenerationConfig) -> str:
    """The effective pool: every enabled, filtered class joined together."""
    return "".join(get_character_classes(config))


def minimum_length(config: GenerationConfig) -> int:
    """Shortest length that still fits one guaranteed character per class."""
    return len(get_character_classes(config))


class PasswordGenerator:
    """
    Generates passwords from a GenerationConfig.

    The only state is the random-bytes callable, so one instance can be
    shared freely.

    Usage:
        gen = PasswordGenerator()
        passwords = gen.generate(GenerationConfig(length=20, count=3))
    """

    def __init__(self, random_bytes: RandomBytes = os.urandom):
        self.random_bytes = random_bytes

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, config: GenerationConfig) -> list[str]:
        """
        Generate `config.count` independent passwords.

        Either every password is produced or the first failure is raised;
        the caller never gets a partial list.

        Raises:
            EmptyPoolError: No characters to pick from
            UniquenessError: The no-duplicates rule can't be satisfied
            ConfigurationError: Length too short for the coverage guarantee
        """
        return [self.generate_single(config) for _ in range(config.count)]

    def generate_single(self, config: GenerationConfig) -> str:
        """
        Generate one password.

        The approach:
        1. Build the pool from the enabled classes
        2. Check that the request is actually possible
        3. Seed one character from each class (coverage guarantee)
        4. Fill the remaining length from the full pool
        5. Shuffle so the seeded characters aren't always up front
        """
        classes = get_character_classes(config)
        pool = "".join(classes)

        if not pool:
            raise EmptyPoolError("No character types selected.")

        distinct = _distinct(pool)
        if not config.allow_duplicate_chars and config.length > len(distinct):
            raise UniquenessError(
                f"Cannot generate password of length {config.length} without duplicates. "
                f"Only {len(distinct)} unique characters available."
            )

        required = minimum_length(config)
        if config.length < required:
            raise ConfigurationError(
                f"Length must be at least {required} with selected character types."
            )

        password_chars = []

        # Coverage: one character from each class's own set
        for chars in classes:
            if config.allow_duplicate_chars:
                password_chars.append(self._random_choice(chars))
                continue

            available = self._unused(chars, password_chars)
            if not available:
                # Overlapping classes: an earlier seed already covers this one
                continue
            password_chars.append(available[self.random_int(len(available))])

        # Fill the rest from the whole pool
        remaining = config.length - len(password_chars)
        for _ in range(remaining):
            if config.allow_duplicate_chars:
                password_chars.append(self._random_choice(pool))
            else:
                password_chars.append(self._unique_choice(distinct, password_chars))

        self._shuffle(password_chars)
        return "".join(password_chars)

    def random_int(self, max_value: int) -> int:
        """Unbiased integer in [0, max_value) from this generator's source."""
        return secure_random_int(max_value, self.random_bytes)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _random_choice(self, chars: str) -> str:
        return chars[self.random_int(len(chars))]

    def _unique_choice(self, chars: str, used: list[str]) -> str:
        """Pick a character from `chars` that isn't in `used` yet."""
        available = self._unused(chars, used)
        if not available:
            raise UniquenessError("No unique characters available.")
        return available[self.random_int(len(available))]

    @staticmethod
    def _unused(chars: str, used: list[str]) -> list[str]:
        return [c for c in _distinct(chars) if c not in used]

    def _shuffle(self, items: list) -> None:
        """In-place Fisher-Yates shuffle."""
        for i in range(len(items) - 1, 0, -1):
            j = self.random_int(i + 1)
            items[i], items[j] = items[j], items[i]


def _distinct(chars: str) -> str:
    """Drop repeated characters, keeping first-seen order."""
    return "".join(dict.fromkeys(chars))
