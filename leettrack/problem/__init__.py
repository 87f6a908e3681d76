from .model import Difficulty, Problem, ProblemLanguage, ProblemTopic
from .route import problem_router
from .service import ProblemService

__all__ = [
    "Difficulty",
    "Problem",
    "ProblemLanguage",
    "ProblemTopic",
    "ProblemService",
    "problem_router",
]
