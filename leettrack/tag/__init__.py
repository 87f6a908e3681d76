from .model import Language, Topic
from .route import tag_router
from .service import TagService

__all__ = ["Language", "Topic", "TagService", "tag_router"]
