import uuid
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy import delete, func, insert
from sqlmodel import select

from leettrack.auth.model import User
from leettrack.config import logger
from leettrack.db.main import commit, execute, flush, rollback
from leettrack.db.model import utc_now
from leettrack.errors import ProblemValidationException, ResourceNotFoundException
from leettrack.tag.model import Language, Topic
from leettrack.tag.schemas import TagResponse
from leettrack.tag.service import TagService

from .model import Difficulty, Problem, ProblemLanguage, ProblemTopic
from .schemas import ProblemFilters, ProblemResponse, ProblemStats, ProblemWrite

problem_logger = logger.getChild("problem_service")


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    return value or None


def _unique(ids: Iterable[uuid.UUID]) -> List[uuid.UUID]:
    return list(dict.fromkeys(ids))


class ProblemService:
    @staticmethod
    def validate(data: ProblemWrite) -> Difficulty:
        """Check the required fields and return the parsed difficulty."""
        if not data.name or not data.difficulty or not data.code:
            raise ProblemValidationException(detail="Missing required fields")

        try:
            return Difficulty(data.difficulty)
        except ValueError:
            raise ProblemValidationException(detail="Invalid difficulty")

    @staticmethod
    async def get_owned_problem(
        session, owner: User, problem_id: Union[str, uuid.UUID]
    ) -> Problem:
        """
        Load a problem only if ``owner`` owns it. A foreign problem is
        reported exactly like a missing one.
        """
        if not isinstance(problem_id, uuid.UUID):
            try:
                problem_id = uuid.UUID(str(problem_id))
            except ValueError:
                raise ResourceNotFoundException(detail="Problem not found")

        result = await execute(
            session,
            select(Problem).where(Problem.id == problem_id, Problem.user_id == owner.id),
        )
        problem = result.scalar_one_or_none()
        if problem is None:
            raise ResourceNotFoundException(detail="Problem not found")
        return problem

    @staticmethod
    async def _attach_tags(
        session,
        problem_id: uuid.UUID,
        topic_names: Optional[List[str]],
        language_names: Optional[List[str]],
    ) -> None:
        topic_ids = await TagService.normalize(session, Topic, topic_names)
        language_ids = await TagService.normalize(session, Language, language_names)

        if topic_ids:
            await execute(
                session,
                insert(ProblemTopic).values(
                    [
                        {"problem_id": problem_id, "topic_id": topic_id}
                        for topic_id in _unique(topic_ids)
                    ]
                ),
            )
        if language_ids:
            await execute(
                session,
                insert(ProblemLanguage).values(
                    [
                        {"problem_id": problem_id, "language_id": language_id}
                        for language_id in _unique(language_ids)
                    ]
                ),
            )

    @staticmethod
    async def hydrate(session, problems: List[Problem]) -> List[ProblemResponse]:
        """Embed each problem's topics and languages as ``{id, name}`` objects."""
        if not problems:
            return []

        problem_ids = [problem.id for problem in problems]

        topics: Dict[uuid.UUID, List[TagResponse]] = defaultdict(list)
        result = await execute(
            session,
            select(ProblemTopic.problem_id, Topic.id, Topic.name)
            .join(Topic, Topic.id == ProblemTopic.topic_id)
            .where(ProblemTopic.problem_id.in_(problem_ids))
            .order_by(ProblemTopic.id),
        )
        for problem_id, topic_id, name in result.all():
            topics[problem_id].append(TagResponse(id=topic_id, name=name))

        languages: Dict[uuid.UUID, List[TagResponse]] = defaultdict(list)
        result = await execute(
            session,
            select(ProblemLanguage.problem_id, Language.id, Language.name)
            .join(Language, Language.id == ProblemLanguage.language_id)
            .where(ProblemLanguage.problem_id.in_(problem_ids))
            .order_by(ProblemLanguage.id),
        )
        for problem_id, language_id, name in result.all():
            languages[problem_id].append(TagResponse(id=language_id, name=name))

        return [
            ProblemResponse(
                id=problem.id,
                name=problem.name,
                difficulty=problem.difficulty,
                code=problem.code,
                notes=problem.notes,
                leetcode_link=problem.leetcode_link,
                created_at=problem.created_at,
                updated_at=problem.updated_at,
                topics=topics.get(problem.id, []),
                languages=languages.get(problem.id, []),
            )
            for problem in problems
        ]

    @staticmethod
    async def create_problem(session, owner: User, data: ProblemWrite) -> ProblemResponse:
        difficulty = ProblemService.validate(data)

        try:
            problem = Problem(
                name=data.name,
                difficulty=difficulty,
                code=data.code,
                notes=_blank_to_none(data.notes),
                leetcode_link=_blank_to_none(data.leetcode_link),
                user_id=owner.id,
            )
            session.add(problem)
            await flush(session)

            await ProblemService._attach_tags(
                session, problem.id, data.topics, data.languages
            )
            await commit(session)
        except Exception:
            await rollback(session)
            raise

        problem_logger.info(f"Problem {problem.id} created for user {owner.id}")
        return (await ProblemService.hydrate(session, [problem]))[0]

    @staticmethod
    async def update_problem(
        session, owner: User, problem_id: Union[str, uuid.UUID], data: ProblemWrite
    ) -> ProblemResponse:
        """
        Overwrite every field and replace the tag sets. Removing the old
        association rows and writing the new ones happen in one transaction.
        """
        problem = await ProblemService.get_owned_problem(session, owner, problem_id)
        difficulty = ProblemService.validate(data)

        try:
            problem.name = data.name
            problem.difficulty = difficulty
            problem.code = data.code
            problem.notes = _blank_to_none(data.notes)
            problem.leetcode_link = _blank_to_none(data.leetcode_link)
            problem.updated_at = utc_now()
            session.add(problem)

            await execute(
                session,
                delete(ProblemTopic)
                .where(ProblemTopic.problem_id == problem.id)
                .execution_options(synchronize_session=False),
            )
            await execute(
                session,
                delete(ProblemLanguage)
                .where(ProblemLanguage.problem_id == problem.id)
                .execution_options(synchronize_session=False),
            )
            await ProblemService._attach_tags(
                session, problem.id, data.topics, data.languages
            )
            await commit(session)
        except Exception:
            await rollback(session)
            raise

        problem_logger.info(f"Problem {problem.id} updated for user {owner.id}")
        return (await ProblemService.hydrate(session, [problem]))[0]

    @staticmethod
    async def delete_problem(
        session, owner: User, problem_id: Union[str, uuid.UUID]
    ) -> None:
        problem = await ProblemService.get_owned_problem(session, owner, problem_id)

        try:
            # Association rows go with it through ON DELETE CASCADE
            await execute(
                session,
                delete(Problem)
                .where(Problem.id == problem.id)
                .execution_options(synchronize_session="fetch"),
            )
            await commit(session)
        except Exception:
            await rollback(session)
            raise

        problem_logger.info(f"Problem {problem_id} deleted for user {owner.id}")

    @staticmethod
    async def get_problem(
        session, owner: User, problem_id: Union[str, uuid.UUID]
    ) -> ProblemResponse:
        problem = await ProblemService.get_owned_problem(session, owner, problem_id)
        return (await ProblemService.hydrate(session, [problem]))[0]

    @staticmethod
    async def list_problems(
        session, owner: User, filters: Optional[ProblemFilters] = None
    ) -> List[ProblemResponse]:
        """The owner's problems, newest first, optionally narrowed by ``filters``."""
        statement = select(Problem).where(Problem.user_id == owner.id)

        if filters is not None:
            if filters.search:
                statement = statement.where(
                    func.lower(Problem.name).contains(filters.search.lower(), autoescape=True)
                )
            if filters.difficulty:
                statement = statement.where(Problem.difficulty == filters.difficulty)
            if filters.topic:
                statement = statement.where(
                    Problem.id.in_(
                        select(ProblemTopic.problem_id)
                        .join(Topic, Topic.id == ProblemTopic.topic_id)
                        .where(Topic.name == filters.topic)
                    )
                )
            if filters.language:
                statement = statement.where(
                    Problem.id.in_(
                        select(ProblemLanguage.problem_id)
                        .join(Language, Language.id == ProblemLanguage.language_id)
                        .where(Language.name == filters.language)
                    )
                )

        result = await execute(session, statement.order_by(Problem.created_at.desc()))
        problems = list(result.scalars().all())
        return await ProblemService.hydrate(session, problems)

    @staticmethod
    async def get_stats(session, owner: User) -> ProblemStats:
        result = await execute(
            session,
            select(Problem.difficulty, func.count(Problem.id))
            .where(Problem.user_id == owner.id)
            .group_by(Problem.difficulty),
        )
        counts = {Difficulty(difficulty): count for difficulty, count in result.all()}

        return ProblemStats(
            total=sum(counts.values()),
            easy=counts.get(Difficulty.EASY, 0),
            medium=counts.get(Difficulty.MEDIUM, 0),
            hard=counts.get(Difficulty.HARD, 0),
        )
