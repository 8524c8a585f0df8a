"""
Authentication Module
=====================

JWT bearer authentication identifying the calling principal.

Usage:
    from shared.auth import Caller, create_access_token, get_current_caller

    token = create_access_token({"sub": owner_address})

    @router.post("/warranties/{warranty_id}/revoke")
    async def revoke(caller: Caller = Depends(get_current_caller)):
        ...
"""

from shared.auth.jwt import (
    create_access_token,
    decode_token,
    TokenData,
)
from shared.auth.dependencies import (
    Caller,
    get_current_caller,
    oauth2_scheme,
)

__all__ = [
    # JWT
    "create_access_token",
    "decode_token",
    "TokenData",
    # Dependencies
    "Caller",
    "get_current_caller",
    "oauth2_scheme",
]
