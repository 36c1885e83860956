"""
Data Contracts for the Matching Engine

Pydantic views of a stored profile and of the engine's output. The store layer
builds ProfileSnapshot objects; nothing in matching.logic touches ORM rows
directly apart from the engine and the connection service, which go through
utils.crud_user.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Set
from pydantic import BaseModel, Field


class Role(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"


class ConnectionDecision(str, Enum):
    """Answer a recipient gives to a pending connection request."""
    ACCEPT = "accept"
    REJECT = "reject"


class ProfileSnapshot(BaseModel):
    """
    Read-only view of one profile and its connection state.

    `pending_connections` holds the ids of users who asked *this* profile to
    connect. Requests this profile sent live on the recipients' records.
    """
    id: str
    name: str = ""
    email: str = ""
    program_of_study: str = ""
    interest: Optional[str] = ""
    skills: List[str] = Field(default_factory=list)
    project_idea: Optional[str] = ""
    availability_date: Optional[date] = None
    role: Role = Role.STUDENT
    is_active: bool = True
    created_at: Optional[datetime] = None

    connections: Set[str] = Field(default_factory=set)
    pending_connections: Set[str] = Field(default_factory=set)


class ProfileSummary(BaseModel):
    """Public fields returned alongside a match."""
    id: str
    name: str
    email: str
    program_of_study: str
    interest: Optional[str]
    skills: List[str]
    project_idea: Optional[str]
    availability_date: Optional[date]
    created_at: Optional[datetime]

    @classmethod
    def from_snapshot(cls, profile: ProfileSnapshot) -> "ProfileSummary":
        return cls(**profile.model_dump(include=set(cls.model_fields)))


class MatchScore(BaseModel):
    score: int = 0
    reasons: List[str] = Field(default_factory=list)


class MatchResult(BaseModel):
    profile: ProfileSummary
    score: int
    reasons: List[str]
    compatibility: int


class ConnectionResult(BaseModel):
    success: bool = True
    message: str
