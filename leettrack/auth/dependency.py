from abc import abstractmethod

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError

from leettrack.config import logger
from leettrack.db.main import get_session
from leettrack.errors import (
    AuthenticationException,
    DatabaseException,
    UserNotFoundException,
)

from .model import User
from .service import UserService
from .util import decode_token

ACCESS_TOKEN_COOKIE = "access_token"

guard_logger = logger.getChild("auth")


class TokenFromCookie:
    def __init__(self, cookie_name: str):
        self.cookie_name = cookie_name

    async def __call__(self, request: Request) -> dict:
        token = request.cookies.get(self.cookie_name)

        if not token:
            raise AuthenticationException(detail="Unauthorized")

        token_data = decode_token(token)
        if not token_data:
            raise AuthenticationException(detail="Invalid or expired session")

        self.verify_token_data(token_data)
        return token_data

    @abstractmethod
    def verify_token_data(self, token_data: dict): ...


class AccessTokenFromCookie(TokenFromCookie):
    def __init__(self):
        super().__init__(ACCESS_TOKEN_COOKIE)

    def verify_token_data(self, token_data: dict):
        user = token_data.get("user")
        if not isinstance(user, dict) or not user.get("email"):
            raise AuthenticationException(detail="Invalid or expired session")


async def get_current_user(
    token_data: dict = Depends(AccessTokenFromCookie()),
    session=Depends(get_session),
) -> User:
    """Resolve the session's identity to a stored user."""
    email = token_data["user"]["email"]

    try:
        user = await UserService.get_user_by_email(email, session)
    except SQLAlchemyError as db_error:
        guard_logger.error(f"Database error during user lookup: {str(db_error)}")
        raise DatabaseException(detail="Failed to retrieve user due to database error")

    if user is None:
        guard_logger.warning(f"Session refers to unknown user: {email}")
        raise UserNotFoundException()

    return user


def get_user_service() -> UserService:
    return UserService()
