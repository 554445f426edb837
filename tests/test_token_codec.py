"""Tests for SessionTokenCodec."""

import base64
import json

import pytest

from fintrack.config.settings import DEMO_TOKEN_SECRET
from fintrack.models.auth import TokenClaims
from fintrack.services.auth import (
    MalformedTokenError,
    SessionTokenCodec,
    SignatureMismatchError,
    TokenError,
)


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _signed(secret: str, encoded_claims: str) -> str:
    """Build a token around arbitrary claims, signed the way the codec signs."""
    return f"{_b64('{}')}.{encoded_claims}.{_b64(secret + encoded_claims)}"


class TestIssue:
    """Tests for token issuance."""

    def test_token_has_three_segments(self, codec):
        assert len(codec.issue(TokenClaims(username="alice")).split(".")) == 3

    def test_header_segment(self, codec):
        """Test the header is the standard HS256/JWT header, compact JSON."""
        header = codec.issue(TokenClaims(username="alice")).split(".")[0]
        assert header == "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"

    def test_claims_segment_is_compact_json(self, codec):
        claims = codec.issue(TokenClaims(username="alice")).split(".")[1]
        assert base64.b64decode(claims).decode() == '{"username":"alice"}'

    def test_signature_segment(self):
        codec = SessionTokenCodec(secret="s3cret")
        _, claims, signature = codec.issue(TokenClaims(username="alice")).split(".")
        assert base64.b64decode(signature).decode() == "s3cret" + claims

    def test_issue_is_deterministic(self, codec):
        claims = TokenClaims(username="alice")
        assert codec.issue(claims) == codec.issue(claims)

    def test_different_users_get_different_tokens(self, codec):
        assert codec.issue(TokenClaims(username="alice")) != codec.issue(TokenClaims(username="bob"))

    def test_secret_from_settings(self, settings):
        codec = SessionTokenCodec(settings=settings)
        signature = codec.issue(TokenClaims(username="a")).split(".")[2]
        assert base64.b64decode(signature).decode().startswith("test-secret")

    def test_default_secret_is_demo_secret(self):
        from fintrack.config import TrackerSettings
        assert TrackerSettings(_env_file=None).token_secret == DEMO_TOKEN_SECRET

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            SessionTokenCodec(secret="")


class TestVerify:
    """Tests for token verification."""

    @pytest.mark.parametrize("username", ["alice", "Bob", "with space", "émile", "a.b.c"])
    def test_round_trip(self, codec, username):
        claims = TokenClaims(username=username)
        assert codec.verify(codec.issue(claims)) == claims

    def test_every_signature_character_is_checked(self, codec):
        """Test that changing any one signature character is detected."""
        header, claims, signature = codec.issue(TokenClaims(username="alice")).split(".")
        for index, char in enumerate(signature):
            replacement = "A" if char != "A" else "B"
            tampered = signature[:index] + replacement + signature[index + 1:]
            with pytest.raises(SignatureMismatchError):
                codec.verify(f"{header}.{claims}.{tampered}")

    def test_swapped_claims_are_rejected(self, codec):
        """Test that alice's signature does not cover bob's claims."""
        header, _, signature = codec.issue(TokenClaims(username="alice")).split(".")
        bob_claims = codec.issue(TokenClaims(username="bob")).split(".")[1]
        with pytest.raises(SignatureMismatchError):
            codec.verify(f"{header}.{bob_claims}.{signature}")

    def test_other_secret_is_rejected(self, codec):
        foreign = SessionTokenCodec(secret="another-secret").issue(TokenClaims(username="alice"))
        with pytest.raises(SignatureMismatchError):
            codec.verify(foreign)

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "...."])
    def test_wrong_segment_count_is_malformed(self, codec, token):
        with pytest.raises(MalformedTokenError):
            codec.verify(token)

    def test_non_string_is_malformed(self, codec):
        with pytest.raises(MalformedTokenError):
            codec.verify(None)

    def test_undecodable_claims_are_malformed(self):
        codec = SessionTokenCodec(secret="s")
        with pytest.raises(MalformedTokenError):
            codec.verify(_signed("s", "!!!not-base64!!!"))

    def test_non_json_claims_are_malformed(self):
        codec = SessionTokenCodec(secret="s")
        with pytest.raises(MalformedTokenError):
            codec.verify(_signed("s", _b64("not json")))

    @pytest.mark.parametrize("payload", [[], {"user": "alice"}, {"username": ""}, {"username": 7}])
    def test_claims_without_username_are_malformed(self, payload):
        codec = SessionTokenCodec(secret="s")
        with pytest.raises(MalformedTokenError):
            codec.verify(_signed("s", _b64(json.dumps(payload))))

    def test_errors_share_a_base(self):
        assert issubclass(MalformedTokenError, TokenError)
        assert issubclass(SignatureMismatchError, TokenError)

    def test_header_is_not_interpreted(self):
        """Test only claims and signature decide validity."""
        codec = SessionTokenCodec(secret="s")
        _, claims, signature = codec.issue(TokenClaims(username="alice")).split(".")
        assert codec.verify(f"anything.{claims}.{signature}").username == "alice"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
