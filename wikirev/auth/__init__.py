from wikirev.auth.context import ANONYMOUS, AuthContext, provide_auth

__all__ = ["ANONYMOUS", "AuthContext", "provide_auth"]
