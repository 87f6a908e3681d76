from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from leettrack.db.main import commit, execute, refresh, rollback
from leettrack.db.model import utc_now

from .model import User


class UserService:
    @staticmethod
    async def get_user_by_email(email: str, session) -> Optional[User]:
        statement = select(User).where(User.email == email)
        result = await execute(session, statement)
        return result.scalar_one_or_none()

    @staticmethod
    async def sign_in(email: str, name: Optional[str], session) -> User:
        """Return the user for ``email``, creating it on first sign-in."""
        user = await UserService.get_user_by_email(email, session)

        if user is None:
            user = User(email=email, name=name)
            session.add(user)
            try:
                await commit(session)
            except IntegrityError:
                # A concurrent first sign-in created the row
                await rollback(session)
                user = await UserService.get_user_by_email(email, session)
                if user is None:
                    raise
            await refresh(session, user)
            return user

        if name and name != user.name:
            user.name = name
            user.updated_at = utc_now()
            await commit(session)
            await refresh(session, user)

        return user
