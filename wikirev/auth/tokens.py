"""Signed bearer tokens.

A token is ``base64(json_payload).base64(hmac_sha256)``; the payload carries
the user id, granted permissions and an expiry.
"""

import base64
import binascii
import hashlib
import hmac
import json
import time


def create_signed_token(payload: dict, secret: str, expires_in: int) -> str:
    """Create a base64url-encoded, HMAC-signed JSON payload with expiration."""
    payload = {**payload, "exp": int(time.time()) + expires_in}
    payload_bytes = json.dumps(payload, separators=(",", ":")).encode()
    payload_b64 = base64.urlsafe_b64encode(payload_bytes).decode()

    sig = hmac.new(secret.encode(), payload_b64.encode(), hashlib.sha256).digest()
    sig_b64 = base64.urlsafe_b64encode(sig).decode()

    return f"{payload_b64}.{sig_b64}"


def verify_signed_token(token: str, secret: str) -> dict | None:
    """Verify and decode a signed token.

    Returns:
        Decoded payload dict, or ``None`` if the token is malformed, expired,
        or has been tampered with.
    """
    payload_b64, sep, sig_b64 = token.partition(".")
    if not sep or "." in sig_b64:
        return None

    expected_sig = hmac.new(secret.encode(), payload_b64.encode(), hashlib.sha256).digest()
    try:
        actual_sig = base64.urlsafe_b64decode(sig_b64)
    except (binascii.Error, ValueError):
        return None

    if not hmac.compare_digest(expected_sig, actual_sig):
        return None

    try:
        payload = json.loads(base64.urlsafe_b64decode(payload_b64))
    except (binascii.Error, ValueError):
        return None

    if not isinstance(payload, dict):
        return None

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or time.time() > exp:
        return None

    return payload


def create_user_token(user_id: int, permissions: list[str], secret: str, expires_in: int) -> str:
    """Issue an access token for ``user_id`` with the given permission flags."""
    return create_signed_token({"uid": user_id, "perms": sorted(set(permissions))}, secret, expires_in)
