"""Unit tests for password hashing."""

from sheetledger.core.security import hash_password, verify_password


class TestPasswordHashing:
    """Test password hashing functions."""

    def test_hash_password(self):
        """Test that password is hashed (not stored in plain text)."""
        password = "MySecurePassword123!"
        hashed = hash_password(password)

        assert hashed != password
        assert isinstance(hashed, str)
        # Argon2 hashes start with $argon2
        assert hashed.startswith("$argon2")

    def test_verify_password_correct(self):
        hashed = hash_password("MySecurePassword123!")

        assert verify_password("MySecurePassword123!", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("MySecurePassword123!")

        assert verify_password("WrongPassword456!", hashed) is False

    def test_hash_same_password_different_hashes(self):
        """Test that hashing same password twice produces different hashes (salt)."""
        password = "MySecurePassword123!"
        hash1 = hash_password(password)
        hash2 = hash_password(password)

        assert hash1 != hash2
        assert verify_password(password, hash1) is True
        assert verify_password(password, hash2) is True

    def test_verify_against_unrecognised_hash(self):
        """A stored value that is not a known hash never verifies."""
        assert verify_password("password", "not-a-hash") is False
