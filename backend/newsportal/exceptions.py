"""HTTP error taxonomy.

Every failure a service can report maps onto one of these. They subclass
``HTTPException`` so that services and dependencies raise them exactly like
any other HTTP error, and the handlers in ``main`` render them into the
``{"success": false, "message": ...}`` envelope.
"""
from fastapi import HTTPException, status


class InvalidInputError(HTTPException):
    """Missing or malformed required fields."""

    def __init__(self, detail: str = "Invalid input."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidCredentialError(HTTPException):
    """A supplied password does not match the stored hash."""

    def __init__(self, detail: str = "Current password is incorrect."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UnauthenticatedError(HTTPException):
    """Missing, invalid or expired credential."""

    def __init__(self, detail: str = "Not authorized, token failed."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    """Authenticated, but neither the owner nor an admin."""

    def __init__(self, detail: str = "Not enough permissions."):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found."):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
