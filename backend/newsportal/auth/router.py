from fastapi import APIRouter, status

from ..database import SessionDep
from ..users import service as user_service
from ..users.models import User as UserModel
from ..users.schema import UserCreate, UserLogin, UserResponse
from .dependencies import CurrentUser
from .schema import TokenResponse
from .service import authenticate_user, create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: SessionDep):
    user = await user_service.create_user(user_data, db)
    return {
        "success": True,
        "message": "Registration successful!",
        "token": create_access_token(user=user),
        "user": user,
    }


@router.post("/login", response_model=TokenResponse)
async def login(credentials: UserLogin, db: SessionDep):
    user = await authenticate_user(db, credentials.email, credentials.password)
    return {
        "success": True,
        "message": "Login successful!",
        "token": create_access_token(user=user),
        "user": user,
    }


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: UserModel = CurrentUser):
    return {"success": True, "user": current_user}
