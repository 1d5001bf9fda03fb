"""Tests for history encryption helpers."""

import os
import stat

import pytest

from core.encryption import (
    InvalidToken,
    decrypt,
    encrypt,
    generate_key,
    load_or_create_key,
)


def test_encrypt_decrypt():
    key = generate_key()
    token = encrypt("kX9#mP2$vL4@nQ", key)
    assert token != b"kX9#mP2$vL4@nQ"
    assert decrypt(token, key) == "kX9#mP2$vL4@nQ"


def test_wrong_key_raises():
    token = encrypt("secret", generate_key())
    with pytest.raises(InvalidToken):
        decrypt(token, generate_key())


class TestKeyFile:
    def test_creates_then_reuses(self, tmp_path):
        path = str(tmp_path / "keys" / "history.key")
        first = load_or_create_key(path)
        second = load_or_create_key(path)
        assert first == second
        assert os.path.exists(path)

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions only")
    def test_owner_only_permissions(self, tmp_path):
        path = str(tmp_path / "history.key")
        load_or_create_key(path)
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_invalid_key_file(self, tmp_path):
        path = tmp_path / "history.key"
        path.write_bytes(b"not a key")
        with pytest.raises(ValueError):
            load_or_create_key(str(path))
