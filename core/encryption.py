"""
encryption.py - At-rest encryption for the password history.

Generated passwords are secrets, so the history never writes them to disk
in the clear. The key is a random Fernet key kept in a small key file
(load_or_create_key), created with owner-only permissions on first run.

Fernet (AES-128-CBC + HMAC-SHA256) also detects tampering: a modified or
foreign token raises InvalidToken instead of decrypting to garbage.
"""

import logging
import os

from cryptography.fernet import Fernet, InvalidToken


logger = logging.getLogger(__name__)

__all__ = [
    "InvalidToken",
    "decrypt",
    "encrypt",
    "generate_key",
    "load_or_create_key",
]


def generate_key() -> bytes:
    """A fresh random Fernet key."""
    return Fernet.generate_key()


def load_or_create_key(key_path: str) -> bytes:
    """
    Read the Fernet key stored at `key_path`, creating it on first use.

    New key files are written with 0600 permissions so other local users
    can't read them.

    Raises:
        OSError: If the file can't be read or written
        ValueError: If the file exists but doesn't hold a valid Fernet key
    """
    if os.path.exists(key_path):
        with open(key_path, "rb") as f:
            key = f.read().strip()
        # Fernet() validates the key format for us
        Fernet(key)
        return key

    key = generate_key()
    directory = os.path.dirname(key_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "wb") as f:
        f.write(key)

    logger.info("Created new history key at %s", key_path)
    return key


def encrypt(plaintext: str, key: bytes) -> bytes:
    """Encrypt a string into a Fernet token."""
    f = Fernet(key)
    return f.encrypt(plaintext.encode("utf-8"))


def decrypt(token: bytes, key: bytes) -> str:
    """
    Decrypt a Fernet token back to a string.

    Raises:
        InvalidToken: If the key is wrong or the data was tampered with
    """
    f = Fernet(key)
    return f.decrypt(token).decode("utf-8")
