import hmac
from typing import Optional

from fastapi import APIRouter, Depends, Header, Response
from sqlalchemy.exc import SQLAlchemyError

from leettrack.config import Config, logger
from leettrack.db.main import get_session
from leettrack.errors import AppException, AuthenticationException, DatabaseException

from .dependency import ACCESS_TOKEN_COOKIE, get_current_user, get_user_service
from .model import User
from .schemas import SignInModel, UserResponseModel
from .service import UserService
from .util import create_access_token

auth_logger = logger.getChild("auth")

auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/sign-in", response_model=UserResponseModel)
async def sign_in(
    response: Response,
    sign_in_data: SignInModel,
    x_identity_secret: Optional[str] = Header(default=None),
    user_service: UserService = Depends(get_user_service),
    session=Depends(get_session),
):
    """
    Callback for the identity provider: trusts the asserted email when the
    shared secret matches, creates the user on first sign-in and opens a session.
    """
    if not x_identity_secret or not hmac.compare_digest(
        x_identity_secret.encode(), Config.IDENTITY_SHARED_SECRET.encode()
    ):
        auth_logger.warning(f"Sign-in rejected for {sign_in_data.email}: bad identity secret")
        raise AuthenticationException(detail="Unauthorized")

    try:
        user = await user_service.sign_in(sign_in_data.email, sign_in_data.name, session)
    except SQLAlchemyError as db_error:
        auth_logger.error(f"Database error during sign-in: {str(db_error)}")
        raise DatabaseException(detail="Failed to sign in due to database error")
    except AppException:
        raise
    except Exception as e:
        auth_logger.error(f"Unexpected error during sign-in: {str(e)}")
        raise DatabaseException(detail="An unexpected error occurred during sign-in")

    set_auth_cookie(response, create_access_token({"id": str(user.id), "email": user.email}))
    auth_logger.info(f"User signed in: {user.email} (ID: {user.id})")

    return user


@auth_router.get("/me", response_model=UserResponseModel)
async def me(current_user: User = Depends(get_current_user)):
    auth_logger.debug(f"Current user requested: {current_user.email}")
    return current_user


@auth_router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(key=ACCESS_TOKEN_COOKIE)
    return {"message": "logged out successfully"}


def set_auth_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=access_token,
        max_age=Config.JWT_ACCESS_TOKEN_EXPIRY,
        httponly=True,
        secure=Config.COOKIE_SECURE,
        samesite="lax",
    )
