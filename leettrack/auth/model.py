from typing import Optional

from sqlalchemy import Column, String, Text
from sqlmodel import Field

from leettrack.db.model import BaseModel


class User(BaseModel, table=True):
    __tablename__ = "users"

    email: str = Field(sa_column=Column(String(255), unique=True, nullable=False, index=True))
    name: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    def __repr__(self):
        return f"<User {self.email}>"
