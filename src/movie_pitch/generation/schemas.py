"""
Schemas for structured generation output.

Generated payloads are validated against these before anything is written.
"""
from typing import List, Tuple

from pydantic import BaseModel, Field, field_validator

from ..models import CastMember


class CastMemberSchema(BaseModel):
    character: str = Field(min_length=1, description="Name of the character in the movie")
    actor: str = Field(min_length=1, description="Actor who plays the character")

    @field_validator("character", "actor")
    @classmethod
    def strip_and_reject_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class CastListSchema(BaseModel):
    cast: List[CastMemberSchema] = Field(
        min_length=1,
        description="Main cast in billing order",
    )

    def to_cast_members(self) -> Tuple[CastMember, ...]:
        return tuple(
            CastMember(character=member.character, actor=member.actor)
            for member in self.cast
        )
