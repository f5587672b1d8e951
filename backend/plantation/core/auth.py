# backend/plantation/core/auth.py

import uuid

import jwt
from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from plantation.core.config import settings

security = HTTPBearer()


# ------------------------------------------------
# TOKEN VERIFICATION
# ------------------------------------------------
def verify_token(token: str):
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_exp": True, "verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    return payload


def user_id_from_claims(payload: dict) -> str:
    """
    Tokens carry the user id as `sub`; older issuers used `userId`.
    """
    user_id = payload.get("sub") or payload.get("userId")
    if not user_id:
        raise HTTPException(status_code=401, detail="User ID not found in token")
    try:
        return str(uuid.UUID(str(user_id)))
    except ValueError:
        raise HTTPException(status_code=401, detail="User ID in token is not a valid UUID")


async def require_user(credentials: HTTPAuthorizationCredentials = Depends(security)):
    token = credentials.credentials
    return verify_token(token)


async def get_current_user_id(payload: dict = Depends(require_user)) -> str:
    return user_id_from_claims(payload)
