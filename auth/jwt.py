"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256.
The secret is the process-wide ``jwt_secret`` setting (env var: ``JWT_SECRET``),
handed in by the caller rather than read at import time.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Dict, Optional

from auth.errors import InvalidToken

TOKEN_EXPIRY_SECONDS = 3600


def _sign(secret: str, raw: bytes) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(
    user_id: int,
    email: str,
    secret: str,
    expiry_seconds: int = TOKEN_EXPIRY_SECONDS,
    now: Optional[float] = None,
) -> str:
    """Create a signed token carrying ``id`` and ``email`` claims plus expiry."""
    if not secret:
        raise ValueError("secret must have a value")
    issued_at = int(time.time() if now is None else now)
    payload = {
        "id": user_id,
        "email": email,
        "iat": issued_at,
        "exp": issued_at + expiry_seconds,
    }
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return urlsafe_b64encode(raw).decode() + "." + _sign(secret, raw)


def verify_token(token: str, secret: str, now: Optional[float] = None) -> Dict[str, Any]:
    """
    Verify token and return its claims.

    Raises ``InvalidToken`` on malformed, tampered or expired tokens.
    """
    try:
        parts = token.split(".", 1)
        if len(parts) != 2:
            raise ValueError("bad format")
        raw = urlsafe_b64decode(parts[0].encode())
        if not hmac.compare_digest(parts[1], _sign(secret, raw)):
            raise ValueError("bad signature")
        payload = json.loads(raw)
        current = time.time() if now is None else now
        if payload.get("exp", 0) <= current:
            raise ValueError("token expired")
        return payload
    except (ValueError, TypeError) as exc:
        raise InvalidToken(f"Invalid token: {exc}") from exc
