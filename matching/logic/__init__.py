"""
Matching Logic Module

Deterministic collaborator matching and the connection-request workflow.
"""

from .contracts import (
    ProfileSnapshot,
    ProfileSummary,
    MatchScore,
    MatchResult,
    ConnectionDecision,
    ConnectionResult,
    Role,
)
from .normalizer import normalize, are_similar
from .keywords import extract_keywords
from .scorer import score_profiles, compatibility_percent
from .candidate_filter import build_exclusions, select_candidates
from .engine import MatchingEngine, find_matches
from .connections import ConnectionService

__all__ = [
    # Engine and workflow
    "MatchingEngine",
    "find_matches",
    "ConnectionService",

    # Building blocks
    "normalize",
    "are_similar",
    "extract_keywords",
    "score_profiles",
    "compatibility_percent",
    "build_exclusions",
    "select_candidates",

    # Contracts
    "ProfileSnapshot",
    "ProfileSummary",
    "MatchScore",
    "MatchResult",
    "ConnectionDecision",
    "ConnectionResult",
    "Role",
]
