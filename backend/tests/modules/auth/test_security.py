"""Tests for modules/auth/security.py."""

from modules.auth.security import hash_password, verify_password


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret1", rounds=4)
        assert hashed != "secret1"
        assert hashed.startswith("$2")

    def test_hash_is_salted(self):
        """Hashing the same password twice should give different hashes."""
        assert hash_password("secret1", rounds=4) != hash_password("secret1", rounds=4)

    def test_verify_correct_password(self):
        hashed = hash_password("secret1", rounds=4)
        assert verify_password("secret1", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("secret1", rounds=4)
        assert verify_password("wrong", hashed) is False

    def test_verify_without_hash(self):
        """Federated-only accounts have no password to match."""
        assert verify_password("secret1", None) is False

    def test_verify_garbage_hash(self):
        assert verify_password("secret1", "not-a-bcrypt-hash") is False
