"""
Unit tests for password hashing helpers.
"""

from crola.core.security import PasswordHash, hash_password, verify_password


class TestPasswordHashing:
    """Tests for PBKDF2 hashing."""

    def test_hash_does_not_contain_plaintext(self):
        stored = hash_password("password1", iterations=1000)
        assert "password1" not in stored
        assert stored.startswith("pbkdf2_sha256$1000$")

    def test_hash_is_salted(self):
        assert hash_password("password1", iterations=1000) != hash_password("password1", iterations=1000)

    def test_verify_accepts_correct_password(self):
        stored = hash_password("password1", iterations=1000)
        assert verify_password("password1", stored) is True

    def test_verify_rejects_wrong_password(self):
        stored = hash_password("password1", iterations=1000)
        assert verify_password("password2", stored) is False

    def test_verify_rejects_malformed_hash(self):
        assert verify_password("password1", "not-a-hash") is False
        assert verify_password("password1", "pbkdf2_sha256$abc$!!$!!") is False

    def test_verify_rejects_unknown_algorithm(self):
        stored = hash_password("password1", iterations=1000).replace("pbkdf2_sha256", "md5", 1)
        assert verify_password("password1", stored) is False

    def test_verify_rejects_zero_iterations(self):
        stored = PasswordHash(0, b"salt", b"digest").encode()
        assert verify_password("password1", stored) is False


class TestPasswordHashFormat:
    """Tests for the stored hash format."""

    def test_decode_reads_encoded_parts(self):
        parsed = PasswordHash.decode(hash_password("password1", iterations=1000))

        assert parsed.iterations == 1000
        assert len(parsed.salt) == 16
        assert len(parsed.digest) == 32

    def test_raised_iteration_count_keeps_old_hashes_valid(self):
        old = hash_password("password1", iterations=1000)
        new = hash_password("password1", iterations=2000)

        assert verify_password("password1", old) is True
        assert verify_password("password1", new) is True
