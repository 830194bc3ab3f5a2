"""
Pydantic schemas for team data.

TeamData is the detached copy of a team that the cache stores and the
services return; ORM instances never leave a database session.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TeamData(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    ties: int = Field(default=0, ge=0)


class TeamCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    ties: int = Field(default=0, ge=0)


class TeamUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    wins: Optional[int] = Field(default=None, ge=0)
    losses: Optional[int] = Field(default=None, ge=0)
    ties: Optional[int] = Field(default=None, ge=0)


__all__ = ["TeamData", "TeamCreate", "TeamUpdate"]
