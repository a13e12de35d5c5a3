"""Unit tests for password hashing."""

from techmatch.crypt.encrypt_decrypt import BCRYPT_ROUNDS, EncryptionDec


class TestEncryptionDec:
    def test_hash_verifies_against_plain_text(self):
        enc = EncryptionDec()
        hashed = enc.hash_password("s3cret")
        assert hashed != "s3cret"
        assert enc.check_passwords("s3cret", hashed) is True

    def test_wrong_password_does_not_verify(self):
        enc = EncryptionDec()
        assert enc.check_passwords("other", enc.hash_password("s3cret")) is False

    def test_hash_uses_configured_cost(self):
        hashed = EncryptionDec().hash_password("s3cret")
        assert hashed.startswith(f"$2b${BCRYPT_ROUNDS:02d}$")

    def test_malformed_hash_does_not_verify(self):
        """Rows without a usable hash (e.g. the development identity) never match."""
        assert EncryptionDec().check_passwords("anything", "!") is False
