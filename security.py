"""
Bearer-token gate for the protected routes.

This is a placeholder login: one configured username/password pair and
random opaque tokens kept in process memory until logout or restart.
"""
import logging
import secrets
import threading
from typing import Any, Optional, Set

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

import config
from errors import AuthenticationRequired

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="Token from POST /auth/login")


class TokenStore:
    """Thread-safe set of currently valid tokens."""

    def __init__(self):
        self._tokens: Set[str] = set()
        self._lock = threading.Lock()

    def issue(self) -> str:
        with self._lock:
            token = secrets.token_hex(32)
            while token in self._tokens:
                token = secrets.token_hex(32)
            self._tokens.add(token)
        return token

    def check(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            return token in self._tokens

    def revoke(self, token: str):
        with self._lock:
            self._tokens.discard(token)

    def __len__(self):
        with self._lock:
            return len(self._tokens)


def verify_credentials(username: Any, password: Any) -> bool:
    # Non-string values never match; they get the same answer as a wrong password.
    if not isinstance(username, str) or not isinstance(password, str):
        return False
    user_ok = secrets.compare_digest(username.encode(), config.ADMIN_USERNAME.encode())
    pass_ok = secrets.compare_digest(password.encode(), config.ADMIN_PASSWORD.encode())
    return user_ok and pass_ok


def get_token_store(request: Request) -> TokenStore:
    store = getattr(request.app.state, "token_store", None)
    if store is None:
        raise RuntimeError("TokenStore not configured")
    return store


def require_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    store: TokenStore = Depends(get_token_store),
) -> str:
    token = credentials.credentials if credentials else None
    if not store.check(token):
        raise AuthenticationRequired()
    return token
