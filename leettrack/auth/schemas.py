import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class SignInModel(BaseModel):
    """Identity asserted by the upstream identity provider."""

    email: EmailStr = Field(..., examples=["coder@example.com"])
    name: Optional[str] = Field(default=None, max_length=255, examples=["Ada"])


class UserResponseModel(BaseModel):
    id: uuid.UUID
    email: str
    name: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
