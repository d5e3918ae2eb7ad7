"""FastAPI dependencies for authentication."""

from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from csa_market.core.security import verify_token

# auto_error=False so a missing header yields 401 rather than 403
security = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """
    Get the authenticated user's id from the bearer token.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    try:
        payload = verify_token(credentials.credentials)
    except jwt.InvalidTokenError:
        raise credentials_exception from None

    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise credentials_exception
    return user_id
