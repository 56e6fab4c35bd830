from typing import Optional

from ..models import CustomModel
from ..users.schema import UserPublic


class TokenResponse(CustomModel):
    success: bool = True
    message: Optional[str] = None
    token: str
    user: UserPublic
