from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncSession as SAAsyncSession
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from leettrack.config import Config, logger

db_logger = logger.getChild("db")


def _engine_options(url: str) -> dict:
    options = {"echo": Config.DB_ECHO}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=Config.DB_POOL_SIZE,
            max_overflow=Config.DB_MAX_OVERFLOW,
            pool_pre_ping=True,
        )
    return options


async_engine = create_async_engine(
    Config.LEETTRACK_DB_URL, **_engine_options(Config.LEETTRACK_DB_URL)
)
async_session = async_sessionmaker(
    bind=async_engine, class_=AsyncSession, expire_on_commit=False
)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # ON DELETE CASCADE is a no-op in SQLite unless this pragma is set per connection
    module = type(dbapi_connection).__module__
    if "sqlite" in module:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async def init_db() -> None:
    """
    Creates the leettrack tables on the pooled engine.
    """
    # Registers every table on SQLModel.metadata
    from leettrack.auth.model import User  # noqa: F401
    from leettrack.problem.model import Problem, ProblemLanguage, ProblemTopic  # noqa: F401
    from leettrack.tag.model import Language, Topic  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    db_logger.info("Database tables are in place")


async def close_db() -> None:
    """
    Closes every pooled connection. Called once at application shutdown.
    """
    await async_engine.dispose()
    db_logger.info("Database connection pool disposed")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get an async session for the leettrack database.
    """
    async with async_session() as session:
        yield session


# Services accept either an AsyncSession (the app) or a plain Session (tests).
async def execute(session, statement):
    if isinstance(session, SAAsyncSession):
        return await session.execute(statement)
    return session.execute(statement)


async def flush(session) -> None:
    if isinstance(session, SAAsyncSession):
        await session.flush()
    else:
        session.flush()


async def commit(session) -> None:
    if isinstance(session, SAAsyncSession):
        await session.commit()
    else:
        session.commit()


async def rollback(session) -> None:
    if isinstance(session, SAAsyncSession):
        await session.rollback()
    else:
        session.rollback()


async def refresh(session, instance) -> None:
    if isinstance(session, SAAsyncSession):
        await session.refresh(instance)
    else:
        session.refresh(instance)
