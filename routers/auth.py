import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from security import TokenStore, get_token_store, require_token, verify_credentials
from errors import InvalidCredentials

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    username: Optional[Any] = None
    password: Optional[Any] = None


@router.post("/login")
def login(payload: LoginRequest, store: TokenStore = Depends(get_token_store)):
    if not verify_credentials(payload.username, payload.password):
        logger.info("Rejected login attempt")
        raise InvalidCredentials()
    token = store.issue()
    logger.info("Login successful, %d active tokens", len(store))
    return {
        "success": True,
        "message": "Login successful",
        "token": token,
        "instructions": "Use this token in Authorization header as: Bearer [token]",
    }


@router.post("/logout")
def logout(token: str = Depends(require_token), store: TokenStore = Depends(get_token_store)):
    store.revoke(token)
    logger.info("Logout successful")
    return {"success": True, "message": "Logout successful"}
