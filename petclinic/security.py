from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional
import logging

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from pydantic import BaseModel

from .config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()
ALGO = "HS256"
# tokens are minted out of band (create_access_token), there is no login route
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/token", auto_error=False)

OWNER_ADMIN = "OWNER_ADMIN"
VET_ADMIN = "VET_ADMIN"
ADMIN = "ADMIN"


class Principal(BaseModel):
    username: str
    roles: List[str] = []


def create_access_token(username: str, roles: Iterable[str], expires_hours: Optional[int] = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(hours=expires_hours or settings.jwt_expires_hours)
    payload = {"sub": username, "roles": list(roles), "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGO)


async def get_current_principal(token: Optional[str] = Depends(oauth2_scheme)) -> Principal:
    if not settings.security_enabled:
        return Principal(username="anonymous", roles=[OWNER_ADMIN, VET_ADMIN, ADMIN])
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated",
                            headers={"WWW-Authenticate": "Bearer"})
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGO])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token",
                            headers={"WWW-Authenticate": "Bearer"})
    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=401, detail="Invalid token")
    return Principal(username=str(sub), roles=[str(r) for r in payload.get("roles") or []])


def require_roles(*roles: str):
    """Dependency factory: the caller must hold at least one of ``roles``."""
    async def checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not set(roles) & set(principal.roles):
            logger.info("Access denied for %s, needs one of %s", principal.username, roles)
            raise HTTPException(status_code=403, detail="Access is denied")
        return principal
    return checker
