from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from veranstalter.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

MSG_FORBIDDEN = "Kein Token mit ausreichender Berechtigung vorhanden"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=False)


@dataclass(frozen=True)
class Principal:
    username: str
    roles: Tuple[str, ...] = ()

    def has_any_role(self, *roles: str) -> bool:
        return any(role in self.roles for role in roles)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode["exp"] = expire
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> Principal:
    """Raises JWTError, TypeError or ValueError for unusable tokens."""
    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    username = payload.get("preferred_username") or payload.get("sub")
    if not username:
        raise ValueError("token without subject")
    roles = payload.get("roles")
    if roles is None:
        roles = (payload.get("realm_access") or {}).get("roles", [])
    return Principal(username=str(username), roles=tuple(str(r) for r in roles))


async def get_current_user(token: str = Depends(oauth2_scheme)) -> Principal:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        return decode_token(token)
    except (JWTError, TypeError, ValueError):
        raise credentials_exception


async def get_current_user_optional(
    token: Optional[str] = Depends(oauth2_scheme_optional),
) -> Optional[Principal]:
    if not token:
        return None
    try:
        return decode_token(token)
    except (JWTError, TypeError, ValueError):
        return None


def require_roles(*roles: str):
    async def dependency(current_user: Principal = Depends(get_current_user)) -> Principal:
        if not current_user.has_any_role(*roles):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=MSG_FORBIDDEN)
        return current_user

    return dependency


require_admin = require_roles("admin")
