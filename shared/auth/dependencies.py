"""
FastAPI Authentication Dependencies
===================================

Resolves the authenticated caller for mutating routes.

Version: 0.1.0
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel, Field

from shared.auth.jwt import decode_token
from shared.logging import bind_context, get_logger


logger = get_logger(__name__)

# OAuth2 scheme for token extraction from Authorization header
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/auth/token",
    auto_error=False,
)


class Caller(BaseModel):
    """Authenticated principal invoking an operation."""

    address: str = Field(..., description="Caller address / identity")
    roles: list[str] = Field(default_factory=list, description="Caller roles")


async def get_current_caller(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Caller:
    """
    Extract and validate the caller from a JWT bearer token.

    Raises:
        HTTPException: 401 if token is missing or invalid
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if token is None:
        logger.warning("auth_token_missing")
        raise credentials_exception

    token_data = decode_token(token, verify_type="access")

    if token_data is None:
        logger.warning("auth_token_invalid")
        raise credentials_exception

    bind_context(caller=token_data.sub)
    logger.debug("caller_authenticated", caller=token_data.sub)

    return Caller(address=token_data.sub, roles=token_data.roles)
