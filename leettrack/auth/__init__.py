from .dependency import get_current_user
from .model import User
from .route import auth_router

__all__ = ["User", "auth_router", "get_current_user"]
