import asyncio

import typer
import uvicorn
from sqlalchemy.ext.asyncio import AsyncSession

import newsportal.db_models  # noqa: F401

from newsportal.config import settings
from newsportal.database import Base, async_session_factory, engine
from newsportal.users.models import User as UserModel, UserRole
from newsportal.users.schema import UserCreate
from newsportal.users.service import create_user

cli = typer.Typer()


async def create_admin_runner(name: str, email: str, password: str, db: AsyncSession):
    """Creates the admin account inside an open session."""
    print("--- Admin User Creation ---")
    try:
        user_data = UserCreate(name=name, email=email, password=password)

        print(f"Creating admin user '{user_data.email}'...")
        admin_user: UserModel = await create_user(user_data=user_data, db=db, role=UserRole.ADMIN)

        print("\n✅ Admin user created successfully!")
        print(f"   ID: {admin_user.id}")
        print(f"   Email: {admin_user.email}")
        print(f"   Role: {admin_user.role.value}")
    finally:
        print("--- Task Finished ---")


@cli.command(name="create-admin")
def createadmin(
    name: str = typer.Option(..., "--name", "-n", help="Admin's full name."),
    email: str = typer.Option(..., "--email", "-e", help="Admin's email address."),
    password: str = typer.Option(..., "--password", "-p", help="Admin's secure password."),
):
    """
    Creates a new user with 'admin' privileges in the database.

    Registration through the API only ever produces regular users.
    """
    async def main():
        async with async_session_factory() as session:
            await create_admin_runner(name=name, email=email, password=password, db=session)

    try:
        asyncio.run(main())
    except Exception as e:
        print(f"\n❌ Error creating admin user: {e}")
        raise typer.Exit(code=1)


@cli.command(name="init-db")
def init_db():
    """
    Creates every table directly from the models (development only; use alembic elsewhere).
    """
    async def main():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await engine.dispose()

    asyncio.run(main())
    print("✅ Tables created.")


@cli.command()
def runserver(
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes."),
):
    """Serves the API with uvicorn on APP_HOST:APP_PORT."""
    uvicorn.run(
        "newsportal.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=reload,
    )


if __name__ == "__main__":
    cli()
