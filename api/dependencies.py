"""API Dependencies - Authentication"""
from typing import Dict, Optional, Tuple

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from domain.auth import StaffUser, StaffUserInDB
from infrastructure.config import Settings, get_settings
from infrastructure.security import get_password_hash, decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")

# username -> (settings the hash was made from, bcrypt hash), filled on first use
_password_hash_cache: Dict[str, Tuple[Settings, str]] = {}


def get_staff_user(username: str, settings: Settings) -> Optional[StaffUserInDB]:
    """Look up a staff account. The only account is the configured administrator."""
    if not username or username != settings.admin_username:
        return None
    cached = _password_hash_cache.get(username)
    if cached is None or cached[0] is not settings:
        cached = (settings, get_password_hash(settings.admin_password))
        _password_hash_cache[username] = cached
    return StaffUserInDB(
        username=settings.admin_username,
        full_name="Front Desk Administrator",
        hashed_password=cached[1]
    )


async def get_current_user(token: str = Depends(oauth2_scheme),
                           settings: Settings = Depends(get_settings)) -> StaffUser:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    username = decode_access_token(token, settings)
    if username is None:
        raise credentials_exception

    user = get_staff_user(username, settings)
    if user is None:
        raise credentials_exception
    return user


async def get_current_active_user(current_user: StaffUser = Depends(get_current_user)) -> StaffUser:
    if current_user.disabled:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user
