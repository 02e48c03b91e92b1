"""Per-request caller identity."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from litestar import Request

from wikirev.auth.tokens import verify_signed_token
from wikirev.lib.errors import NeedLoginError, NotAllowedError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "

# Permission flag gating person/character wiki edits
MONO_EDIT = "mono_edit"


@dataclass(frozen=True)
class AuthContext:
    """Who is calling and what they may do. ``user_id`` is 0 for anonymous callers."""

    user_id: int = 0
    permissions: frozenset[str] = field(default_factory=frozenset)

    @property
    def login(self) -> bool:
        return self.user_id > 0

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def require_login(self, action: str) -> None:
        if not self.login:
            raise NeedLoginError(action)

    def require_permission(self, permission: str, action: str) -> None:
        if not self.has_permission(permission):
            raise NotAllowedError(action)


ANONYMOUS = AuthContext()


def auth_from_token(token: str, secret: str) -> AuthContext:
    payload = verify_signed_token(token, secret)
    if payload is None:
        return ANONYMOUS

    uid = payload.get("uid")
    perms = payload.get("perms") or []
    if not isinstance(uid, int) or isinstance(uid, bool) or uid < 1 or not isinstance(perms, list):
        logger.debug("Rejected token with malformed payload")
        return ANONYMOUS

    return AuthContext(user_id=uid, permissions=frozenset(str(p) for p in perms))


def provide_auth(request: Request) -> AuthContext:
    """Dependency resolving the Authorization header into an AuthContext.

    Missing, invalid or expired tokens resolve to the anonymous context;
    handlers that need a user call :meth:`AuthContext.require_login`.
    """
    header = request.headers.get("authorization", "")
    if not header.lower().startswith(BEARER_PREFIX):
        return ANONYMOUS
    return auth_from_token(header[len(BEARER_PREFIX):].strip(), request.app.state.secret_key)
