from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError

from leettrack.auth.dependency import get_current_user
from leettrack.auth.model import User
from leettrack.config import logger
from leettrack.db.main import get_session
from leettrack.errors import AppException, DatabaseException

from .model import Difficulty
from .schemas import (
    DeleteResponse,
    ProblemFilters,
    ProblemResponse,
    ProblemStats,
    ProblemWrite,
)
from .service import ProblemService

# Create a module-specific logger
problem_logger = logger.getChild("problem")

problem_router = APIRouter(prefix="/problems", tags=["problems"])


@problem_router.get(
    "",
    response_model=List[ProblemResponse],
    summary="List problems",
    description="Lists the caller's problems, newest first.",
)
async def list_problems(
    search: Optional[str] = None,
    difficulty: Optional[Difficulty] = None,
    topic: Optional[str] = None,
    language: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    session=Depends(get_session),
):
    filters = ProblemFilters(
        search=search, difficulty=difficulty, topic=topic, language=language
    )
    problem_logger.info(f"Listing problems for user {current_user.id}")

    try:
        problems = await ProblemService.list_problems(session, current_user, filters)
    except SQLAlchemyError as db_error:
        problem_logger.error(f"Database error listing problems: {str(db_error)}")
        raise DatabaseException(detail="Failed to fetch problems")
    except Exception as e:
        problem_logger.error(f"Unexpected error listing problems: {str(e)}")
        raise DatabaseException(detail="Failed to fetch problems")

    problem_logger.info(f"Retrieved {len(problems)} problems")
    return problems


@problem_router.post(
    "",
    response_model=ProblemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a problem",
    description="Creates a problem, creating any topics or languages it names for the first time.",
)
async def create_problem(
    problem_data: ProblemWrite,
    current_user: User = Depends(get_current_user),
    session=Depends(get_session),
):
    problem_logger.info(f"Creating problem for user {current_user.id}")

    try:
        return await ProblemService.create_problem(session, current_user, problem_data)
    except AppException:
        raise
    except SQLAlchemyError as db_error:
        problem_logger.error(f"Database error creating problem: {str(db_error)}")
        raise DatabaseException(detail="Failed to create problem")
    except Exception as e:
        problem_logger.error(f"Unexpected error creating problem: {str(e)}")
        raise DatabaseException(detail="Failed to create problem")


@problem_router.get(
    "/stats",
    response_model=ProblemStats,
    summary="Problem counts",
    description="Counts the caller's problems by difficulty.",
)
async def get_problem_stats(
    current_user: User = Depends(get_current_user),
    session=Depends(get_session),
):
    try:
        return await ProblemService.get_stats(session, current_user)
    except SQLAlchemyError as db_error:
        problem_logger.error(f"Database error counting problems: {str(db_error)}")
        raise DatabaseException(detail="Failed to fetch problem stats")


@problem_router.get(
    "/{problem_id}",
    response_model=ProblemResponse,
    summary="Get a problem",
    description="Retrieves one of the caller's problems by its ID.",
)
async def get_problem(
    problem_id: str,
    current_user: User = Depends(get_current_user),
    session=Depends(get_session),
):
    problem_logger.info(f"Fetching problem ID: {problem_id}")

    try:
        return await ProblemService.get_problem(session, current_user, problem_id)
    except AppException:
        raise
    except SQLAlchemyError as db_error:
        problem_logger.error(f"Database error retrieving problem: {str(db_error)}")
        raise DatabaseException(detail="Failed to fetch problem")
    except Exception as e:
        problem_logger.error(f"Unexpected error retrieving problem: {str(e)}")
        raise DatabaseException(detail="Failed to fetch problem")


@problem_router.put(
    "/{problem_id}",
    response_model=ProblemResponse,
    summary="Update a problem",
    description="Overwrites every field of a problem and replaces its topics and languages.",
)
async def update_problem(
    problem_id: str,
    problem_data: ProblemWrite,
    current_user: User = Depends(get_current_user),
    session=Depends(get_session),
):
    problem_logger.info(f"Updating problem ID: {problem_id}")

    try:
        return await ProblemService.update_problem(
            session, current_user, problem_id, problem_data
        )
    except AppException:
        raise
    except SQLAlchemyError as db_error:
        problem_logger.error(f"Database error updating problem: {str(db_error)}")
        raise DatabaseException(detail="Failed to update problem")
    except Exception as e:
        problem_logger.error(f"Unexpected error updating problem: {str(e)}")
        raise DatabaseException(detail="Failed to update problem")


@problem_router.delete(
    "/{problem_id}",
    response_model=DeleteResponse,
    summary="Delete a problem",
    description="Deletes a problem together with its topic and language links.",
)
async def delete_problem(
    problem_id: str,
    current_user: User = Depends(get_current_user),
    session=Depends(get_session),
):
    problem_logger.info(f"Deleting problem ID: {problem_id}")

    try:
        await ProblemService.delete_problem(session, current_user, problem_id)
    except AppException:
        raise
    except SQLAlchemyError as db_error:
        problem_logger.error(f"Database error deleting problem: {str(db_error)}")
        raise DatabaseException(detail="Failed to delete problem")
    except Exception as e:
        problem_logger.error(f"Unexpected error deleting problem: {str(e)}")
        raise DatabaseException(detail="Failed to delete problem")

    return DeleteResponse(success=True)
