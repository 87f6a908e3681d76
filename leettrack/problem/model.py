import uuid
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Column, Enum, ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlmodel import Field, SQLModel

from leettrack.db.model import BaseModel


class Difficulty(str, PyEnum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Problem(BaseModel, table=True):
    """
    One tracked coding exercise and the solution its owner stored for it.
    Topic and language tags live in the association tables below.
    """

    __tablename__ = "problems"

    name: str = Field(sa_column=Column(Text, nullable=False))
    difficulty: Difficulty = Field(
        sa_column=Column(
            Enum(
                Difficulty,
                name="difficulty",
                native_enum=False,
                values_callable=lambda enum: [member.value for member in enum],
            ),
            nullable=False,
        )
    )
    code: str = Field(sa_column=Column(Text, nullable=False))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    leetcode_link: Optional[str] = Field(
        default=None, sa_column=Column(Text, nullable=True)
    )
    user_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
        )
    )

    def __repr__(self):
        return f"<Problem {self.name} ({self.difficulty})>"


class ProblemTopic(SQLModel, table=True):
    __tablename__ = "problem_topics"
    __table_args__ = (UniqueConstraint("problem_id", "topic_id"),)

    # Autoincrement keeps the order tags were written in
    id: Optional[int] = Field(default=None, sa_column=Column(Integer, primary_key=True, autoincrement=True))
    problem_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid, ForeignKey("problems.id", ondelete="CASCADE"), nullable=False, index=True
        )
    )
    topic_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid, ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True
        )
    )


class ProblemLanguage(SQLModel, table=True):
    __tablename__ = "problem_languages"
    __table_args__ = (UniqueConstraint("problem_id", "language_id"),)

    id: Optional[int] = Field(default=None, sa_column=Column(Integer, primary_key=True, autoincrement=True))
    problem_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid, ForeignKey("problems.id", ondelete="CASCADE"), nullable=False, index=True
        )
    )
    language_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid, ForeignKey("languages.id", ondelete="CASCADE"), nullable=False, index=True
        )
    )
