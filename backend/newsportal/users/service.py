import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from passlib.context import CryptContext

from ..exceptions import InvalidCredentialError, InvalidInputError, NotFoundError
from .models import User as UserModel, UserRole, utcnow
from .schema import PasswordChange, ProfileUpdate, UserCreate

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 6


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


async def create_user(user_data: UserCreate, db: AsyncSession, role: UserRole = UserRole.USER) -> UserModel:
    existing_user = await get_user_by_email(user_data.email, db)
    if existing_user:
        raise InvalidInputError("User already exists with this email.")

    db_user = UserModel(
        name=user_data.name,
        email=user_data.email,
        hashed_password=hash_password(user_data.password),
        role=role,
    )
    db.add(db_user)
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent registration took the address between the check and the insert.
        await db.rollback()
        raise InvalidInputError("User already exists with this email.")
    await db.refresh(db_user)
    logger.info(f"Registered user {db_user.id} ({db_user.email}) with role {role.value}")
    return db_user


async def get_user_by_id(user_id: str, db: AsyncSession) -> Optional[UserModel]:
    result = await db.execute(select(UserModel).where(UserModel.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(email: str, db: AsyncSession) -> Optional[UserModel]:
    result = await db.execute(select(UserModel).where(UserModel.email == email.lower()))
    return result.scalar_one_or_none()


async def get_public_profile(user_id: str, db: AsyncSession) -> UserModel:
    user = await get_user_by_id(user_id, db)
    if user is None:
        raise NotFoundError("User not found.")
    return user


async def update_last_login(user: UserModel, db: AsyncSession) -> None:
    user.last_login = utcnow()
    await db.commit()


async def update_profile(db: AsyncSession, db_user: UserModel, profile_in: ProfileUpdate) -> UserModel:
    """Apply name/bio/avatar to the caller's own record.

    ``name`` is only replaced by a non-empty value, while ``bio`` and
    ``avatar`` are written whenever they were sent, so a client can blank them.
    """
    update_data = profile_in.model_dump(exclude_unset=True)

    name = (update_data.get("name") or "").strip()
    if name:
        db_user.name = name
    if "bio" in update_data:
        db_user.bio = update_data["bio"]
    if "avatar" in update_data:
        db_user.avatar = update_data["avatar"]

    await db.commit()
    await db.refresh(db_user)
    logger.info(f"Updated profile of user {db_user.id}")
    return db_user


async def change_password(db: AsyncSession, db_user: UserModel, data: PasswordChange) -> None:
    """Replace the caller's password after verifying the current one.

    Issued tokens are not revoked.
    """
    if not verify_password(data.current_password, db_user.hashed_password):
        logger.warning(f"Password change for user {db_user.id} rejected: current password mismatch")
        raise InvalidCredentialError("Current password is incorrect.")

    if len(data.new_password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters.")

    db_user.hashed_password = hash_password(data.new_password)
    await db.commit()
    logger.info(f"Changed password of user {db_user.id}")
