import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from leettrack.tag.schemas import TagResponse

from .model import Difficulty


class CamelModel(BaseModel):
    """Speaks camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProblemWrite(CamelModel):
    """
    Body of both create and update. Required fields are checked by the
    service so that a missing one is a 400 rather than a schema error.
    """

    name: Optional[str] = Field(default=None, examples=["Two Sum"])
    difficulty: Optional[str] = Field(default=None, examples=["Easy"])
    code: Optional[str] = Field(default=None, examples=["def two_sum(nums, target): ..."])
    notes: Optional[str] = None
    leetcode_link: Optional[str] = Field(
        default=None, examples=["https://leetcode.com/problems/two-sum/"]
    )
    topics: Optional[List[str]] = Field(default=None, examples=[["Array", "Hash Table"]])
    languages: Optional[List[str]] = Field(default=None, examples=[["Python"]])


class ProblemResponse(CamelModel):
    id: uuid.UUID
    name: str
    difficulty: Difficulty
    code: str
    notes: Optional[str] = None
    leetcode_link: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    topics: List[TagResponse] = []
    languages: List[TagResponse] = []


class ProblemFilters(BaseModel):
    search: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    topic: Optional[str] = None
    language: Optional[str] = None


class ProblemStats(BaseModel):
    total: int
    easy: int
    medium: int
    hard: int


class DeleteResponse(BaseModel):
    success: bool = True
