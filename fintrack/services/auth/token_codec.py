"""
Session Token Codec

Encodes and verifies the opaque credential that proves a prior login.

Token layout (three base64 segments joined by '.'):
    base64(header) . base64(claims) . base64(secret + base64(claims))

SECURITY NOTE: This is NOT a real signed token. The "signature" is the
secret and the encoded claims concatenated and base64-encoded, so anyone
holding a token can read the secret back out of it. The format is kept
so that tokens already stored by earlier versions still verify.

There is no expiry, nonce or issued-at claim: the same claims and secret
always produce the same token.
"""

import base64
import binascii
import hmac
import json
from typing import Optional

from pydantic import ValidationError

from fintrack.config import TrackerSettings, get_settings
from fintrack.models.auth import TokenClaims
from fintrack.services.auth.errors import MalformedTokenError, SignatureMismatchError


TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _b64decode(segment: str) -> str:
    return base64.b64decode(segment.encode("ascii"), validate=True).decode("utf-8")


def _compact_json(payload: dict) -> str:
    return json.dumps(payload, separators=(",", ":"))


class SessionTokenCodec:
    """
    Issues and verifies session tokens for a fixed process secret.

    Both operations are pure: no logging, no store access.
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        settings: Optional[TrackerSettings] = None,
    ):
        if secret is None:
            secret = (settings or get_settings()).token_secret
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret

    def _sign(self, encoded_claims: str) -> str:
        return _b64encode(self._secret + encoded_claims)

    def issue(self, claims: TokenClaims) -> str:
        """Encode claims into a token. Deterministic in (secret, claims)."""
        header = _b64encode(_compact_json(TOKEN_HEADER))
        encoded_claims = _b64encode(_compact_json(claims.model_dump()))
        return f"{header}.{encoded_claims}.{self._sign(encoded_claims)}"

    def verify(self, token: str) -> TokenClaims:
        """
        Check a token and return its claims.

        Raises:
            MalformedTokenError: Not three parts, or claims not decodable
            SignatureMismatchError: Signature does not match the claims
        """
        if not isinstance(token, str):
            raise MalformedTokenError("Token must be a string")

        parts = token.split(".")
        if len(parts) != 3:
            raise MalformedTokenError(
                f"Token has {len(parts)} segment(s), expected 3"
            )

        _header, encoded_claims, signature = parts
        expected = self._sign(encoded_claims)
        if not hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8")):
            raise SignatureMismatchError("Token signature does not match its claims")

        try:
            payload = json.loads(_b64decode(encoded_claims))
        except (binascii.Error, UnicodeError, ValueError) as e:
            raise MalformedTokenError(f"Token claims are not decodable: {e}") from e

        if not isinstance(payload, dict):
            raise MalformedTokenError("Token claims are not an object")

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise MalformedTokenError(f"Token claims are invalid: {e}") from e
