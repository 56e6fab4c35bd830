import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..exceptions import UnauthenticatedError
from ..users import service as user_service
from ..users.models import User

logger = logging.getLogger(__name__)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a token carrying the user id (``sub``), role and an expiry claim.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {
        "sub": user.id,
        "role": user.role.value,
        "type": "access",
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def _decode_token(token: str) -> Optional[Dict]:
    """
    Check signature and expiry. Returns None for any tampered, malformed or
    expired token.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


async def get_user_from_access_token(token: str, db: AsyncSession) -> Optional[User]:
    payload = _decode_token(token)
    if payload is None or payload.get("type") != "access":
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    # A valid signature for a user that no longer exists resolves to nobody.
    return await user_service.get_user_by_id(user_id, db)


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    """
    Check an email/password pair. Unknown email and wrong password fail the
    same way so that callers cannot enumerate registered addresses.
    """
    user = await user_service.get_user_by_email(email, db)
    if not user or not user_service.verify_password(password, user.hashed_password):
        logger.warning(f"Failed login attempt for {email}")
        raise UnauthenticatedError("Invalid email or password.")

    await user_service.update_last_login(user=user, db=db)
    logger.info(f"User {user.id} logged in")
    return user
