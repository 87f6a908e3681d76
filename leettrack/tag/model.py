from sqlalchemy import Column, Text
from sqlmodel import Field

from leettrack.db.model import BaseModel


class Topic(BaseModel, table=True):
    """A global, reusable subject classifier such as "Array" or "Dynamic Programming"."""

    __tablename__ = "topics"

    name: str = Field(sa_column=Column(Text, unique=True, nullable=False))


class Language(BaseModel, table=True):
    """A global, reusable programming-language classifier."""

    __tablename__ = "languages"

    name: str = Field(sa_column=Column(Text, unique=True, nullable=False))
