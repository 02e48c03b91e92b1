"""Tests for resolving request identity."""

from unittest.mock import MagicMock

import pytest

from wikirev.auth.context import ANONYMOUS, MONO_EDIT, AuthContext, auth_from_token, provide_auth
from wikirev.auth.tokens import create_signed_token, create_user_token
from wikirev.lib.errors import NeedLoginError, NotAllowedError


def _request(authorization=None, secret="secret"):
    request = MagicMock()
    request.headers = {"authorization": authorization} if authorization is not None else {}
    request.app.state.secret_key = secret
    return request


class TestAuthContext:
    def test_anonymous(self):
        assert ANONYMOUS.login is False
        assert ANONYMOUS.has_permission(MONO_EDIT) is False

    def test_require_login(self):
        with pytest.raises(NeedLoginError, match="you need to login before editing a person"):
            ANONYMOUS.require_login("editing a person")
        AuthContext(user_id=3).require_login("editing a person")

    def test_require_permission(self):
        ctx = AuthContext(user_id=3, permissions=frozenset({MONO_EDIT}))
        ctx.require_permission(MONO_EDIT, "edit person")

        with pytest.raises(NotAllowedError, match="edit person"):
            AuthContext(user_id=3).require_permission(MONO_EDIT, "edit person")


class TestAuthFromToken:
    def test_valid_token(self):
        ctx = auth_from_token(create_user_token(7, [MONO_EDIT], "secret", 60), "secret")
        assert ctx.user_id == 7
        assert ctx.has_permission(MONO_EDIT)

    def test_invalid_token_is_anonymous(self):
        assert auth_from_token("garbage", "secret") is ANONYMOUS

    @pytest.mark.parametrize(
        "payload",
        [{"uid": 0}, {"uid": -1}, {"uid": "7"}, {"uid": True}, {"uid": 7, "perms": "mono_edit"}],
    )
    def test_malformed_payload_is_anonymous(self, payload):
        token = create_signed_token(payload, "secret", 60)
        assert auth_from_token(token, "secret") is ANONYMOUS


class TestProvideAuth:
    def test_missing_header(self):
        assert provide_auth(_request()) is ANONYMOUS

    def test_non_bearer_scheme(self):
        assert provide_auth(_request("Basic abc")) is ANONYMOUS

    def test_bearer_token_case_insensitive(self):
        token = create_user_token(4, [], "secret", 60)
        ctx = provide_auth(_request(f"BEARER {token}"))
        assert ctx.user_id == 4
        assert ctx.login
