"""Poll membership schemas."""
from typing import List
from pydantic import BaseModel, Field


class MemberCreate(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)


class MemberResponse(BaseModel):
    id: int
    user_id: str
    email: str


class EmailSuggestions(BaseModel):
    emails: List[str]
