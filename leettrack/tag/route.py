from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from leettrack.auth.dependency import AccessTokenFromCookie
from leettrack.config import logger
from leettrack.db.main import get_session
from leettrack.errors import DatabaseException

from .model import Language, Topic
from .schemas import TagResponse
from .service import TagModel, TagService

tag_logger = logger.getChild("tag")

tag_router = APIRouter(tags=["tags"])


async def _list_tags(model: TagModel, session) -> List[TagResponse]:
    kind = model.__tablename__
    tag_logger.info(f"Listing {kind}")

    try:
        tags = await TagService.list_tags(session, model)
    except SQLAlchemyError as db_error:
        tag_logger.error(f"Database error listing {kind}: {str(db_error)}")
        raise DatabaseException(detail=f"Failed to fetch {kind}")
    except Exception as e:
        tag_logger.error(f"Unexpected error listing {kind}: {str(e)}")
        raise DatabaseException(detail=f"Failed to fetch {kind}")

    return [TagResponse.model_validate(tag) for tag in tags]


@tag_router.get(
    "/topics",
    response_model=List[TagResponse],
    summary="List topics",
    description="Every known topic, alphabetically.",
)
async def list_topics(
    token_data: dict = Depends(AccessTokenFromCookie()),
    session=Depends(get_session),
):
    return await _list_tags(Topic, session)


@tag_router.get(
    "/languages",
    response_model=List[TagResponse],
    summary="List languages",
    description="Every known language, alphabetically.",
)
async def list_languages(
    token_data: dict = Depends(AccessTokenFromCookie()),
    session=Depends(get_session),
):
    return await _list_tags(Language, session)
