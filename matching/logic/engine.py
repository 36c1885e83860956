"""
Matching Engine

Orchestrates a match request:
1. Load the requester with its connection state
2. Derive exclusions and scan the candidate pool
3. Score every candidate
4. Drop zero scores and rank
"""

import logging
import time
from typing import List

from sqlalchemy.orm import Session

from utils import crud_user
from utils.errors import NotFound
from .candidate_filter import select_candidates
from .contracts import ProfileSnapshot, ProfileSummary, MatchResult
from .scorer import score_profiles, compatibility_percent

logger = logging.getLogger(__name__)


def rank_matches(matches: List[MatchResult]) -> List[MatchResult]:
    """Highest score first; equal scores fall back to profile id."""
    return sorted(matches, key=lambda m: (-m.score, m.profile.id))


class MatchingEngine:
    """Stateless matcher bound to one database session."""

    def __init__(self, db: Session):
        self.db = db

    def find_matches(self, requester_id: str) -> List[MatchResult]:
        start_time = time.perf_counter()

        requester = crud_user.get_profile(self.db, requester_id)
        if requester is None:
            raise NotFound("User not found")

        candidates = select_candidates(self.db, requester)
        logger.info(f"Scoring {len(candidates)} candidates for user {requester_id}")

        matches = self.score_candidates(requester, candidates)
        ranked = rank_matches(matches)

        elapsed = (time.perf_counter() - start_time) * 1000
        logger.info(f"Found {len(ranked)} matches for user {requester_id} ({elapsed:.2f}ms)")
        return ranked

    def score_candidates(self, requester: ProfileSnapshot, candidates) -> List[MatchResult]:
        matches: List[MatchResult] = []
        for user in candidates:
            try:
                candidate = crud_user.to_snapshot(self.db, user, with_connections=False)
                scored = score_profiles(requester, candidate)
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed candidate {getattr(user, 'id', '?')}: {e}")
                continue

            if scored.score <= 0:
                continue

            matches.append(MatchResult(
                profile=ProfileSummary.from_snapshot(candidate),
                score=scored.score,
                reasons=scored.reasons,
                compatibility=compatibility_percent(scored.score),
            ))
        return matches


def find_matches(db: Session, requester_id: str) -> List[MatchResult]:
    return MatchingEngine(db).find_matches(requester_id)
