"""
Tests for password hashing and bearer token signing.
"""

import pytest

from auth.dependencies import extract_bearer_token
from auth.jwt import InvalidToken, TokenSigner
from auth.password import hash_password, verify_password


class TestPasswordHashing:
    def test_hash_is_not_plaintext_and_verifies(self):
        hashed = hash_password("password123", rounds=4)
        assert hashed != "password123"
        assert verify_password("password123", hashed)
        assert not verify_password("password124", hashed)

    def test_salt_differs_per_hash(self):
        assert hash_password("same-password", rounds=4) != hash_password("same-password", rounds=4)

    def test_garbage_hash_does_not_verify(self):
        assert verify_password("password123", "not-a-bcrypt-hash") is False

    def test_cost_factor_is_encoded_in_hash(self):
        assert hash_password("password123", rounds=5).startswith("$2b$05$")

    def test_non_ascii_password_round_trips(self):
        hashed = hash_password("pässwörd", rounds=4)
        assert verify_password("pässwörd", hashed)
        assert not verify_password("passwort", hashed)


class TestTokenSigner:
    def setup_method(self):
        self.signer = TokenSigner("secret", expiry_seconds=60)

    def test_round_trip_returns_user_id(self):
        token = self.signer.create_token(42)
        assert self.signer.verify_token(token) == 42

    def test_expired_token_rejected(self):
        token = self.signer.create_token(42, now=1_000)
        with pytest.raises(InvalidToken, match="expired"):
            self.signer.verify_token(token, now=1_061)

    def test_other_secret_rejected(self):
        token = TokenSigner("other", expiry_seconds=60).create_token(42)
        with pytest.raises(InvalidToken, match="signature"):
            self.signer.verify_token(token)

    def test_tampered_payload_rejected(self):
        token = self.signer.create_token(42)
        forged = self.signer.create_token(7).split(".")[0] + "." + token.split(".")[1]
        with pytest.raises(InvalidToken):
            self.signer.verify_token(forged)

    @pytest.mark.parametrize("token", ["invalid_token", "a.b", "!!!.abc", "é.é"])
    def test_malformed_tokens_rejected(self, token):
        with pytest.raises(InvalidToken):
            self.signer.verify_token(token)


class TestExtractBearerToken:
    def test_extracts_token(self):
        assert extract_bearer_token("Bearer abc.def") == "abc.def"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Basic abc", "bearerabc"])
    def test_missing_or_malformed(self, header):
        assert extract_bearer_token(header) is None
