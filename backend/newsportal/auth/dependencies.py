from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from ..config import settings
from ..database import SessionDep
from ..exceptions import UnauthenticatedError

from ..users.models import User
from ..auth import service as auth_service

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)


async def get_current_user_from_access_token(
    db: SessionDep,
    token: str | None = Depends(oauth2_scheme),
) -> User:
    if not token:
        raise UnauthenticatedError("Not authorized, no token.")

    user = await auth_service.get_user_from_access_token(token=token, db=db)
    if user is None:
        raise UnauthenticatedError("Not authorized, token failed.")
    return user

CurrentUser = Depends(get_current_user_from_access_token)
