from pydantic import ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from ..models import CustomModel
from .models import UserRole


class UserBase(CustomModel):
    email: EmailStr = Field(..., json_schema_extra={"example": "user@example.com"})
    name: str = Field(..., min_length=1, max_length=50, json_schema_extra={"example": "Jane Doe"})

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class UserCreate(UserBase):
    password: str = Field(..., min_length=6, json_schema_extra={"example": "secret123"})


class UserLogin(CustomModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.strip().lower()


class ProfileUpdate(CustomModel):
    # Only these three fields are writable; anything else in the body is dropped.
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, max_length=50, json_schema_extra={"example": "Jane Q. Doe"})
    bio: Optional[str] = Field(None, max_length=200)
    avatar: Optional[str] = Field(None, max_length=500)


class PasswordChange(CustomModel):
    current_password: str = Field(..., json_schema_extra={"example": "secret123"})
    # Length is checked by the service after the current password is verified.
    new_password: str = Field(..., json_schema_extra={"example": "new-secret-456"})


class UserPublic(CustomModel):
    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    bio: Optional[str] = None
    role: UserRole
    created_at: datetime


class UserResponse(CustomModel):
    success: bool = True
    message: Optional[str] = None
    user: UserPublic
