from .main import async_engine, close_db, get_session, init_db
from .model import BaseModel

__all__ = [
    "async_engine",
    "close_db",
    "get_session",
    "init_db",
    "BaseModel",
]
