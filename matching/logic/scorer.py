"""
Match Scorer

Computes an additive compatibility score between the requesting profile and
one candidate, with a human-readable reason for every dimension that matched.

Dimensions (independent, summed):
- interests: 2 points per requester interest keyword with a counterpart
- skills: 3 points per requester skill with a counterpart
- project idea: 1 point per requester project keyword with a counterpart
"""

from typing import Iterable, List

from .contracts import ProfileSnapshot, MatchScore
from .keywords import extract_keywords
from .normalizer import are_similar
from .constants import (
    INTEREST_WEIGHT,
    SKILL_WEIGHT,
    PROJECT_KEYWORD_WEIGHT,
    SATURATION_SCORE,
    MAX_COMPATIBILITY,
    MAX_PROJECT_KEYWORDS_IN_REASON,
    REASON_SHARED_INTERESTS,
    REASON_SHARED_SKILLS,
    REASON_PROJECT_KEYWORDS,
)


def terms_match(mine: str, theirs: str) -> bool:
    """Both arguments are expected lowercase."""
    return theirs in mine or mine in theirs or are_similar(mine, theirs)


def shared_terms(mine: Iterable[str], theirs: List[str]) -> List[str]:
    """
    Requester terms with at least one counterpart in `theirs`.

    Iterates the requester's side, so a term repeated there is returned (and
    scored) once per occurrence.
    """
    return [
        term for term in mine
        if any(terms_match(term, other) for other in theirs)
    ]


def compatibility_percent(score: int) -> int:
    """Raw score as a 0-100 percentage; SATURATION_SCORE and above give 100."""
    # half-up, score is never negative
    percent = int(score * 100 / SATURATION_SCORE + 0.5)
    return min(MAX_COMPATIBILITY, percent)


def score_interests(requester: ProfileSnapshot, candidate: ProfileSnapshot):
    if not requester.interest or not candidate.interest:
        return 0, None
    shared = shared_terms(
        extract_keywords(requester.interest),
        extract_keywords(candidate.interest),
    )
    if not shared:
        return 0, None
    return len(shared) * INTEREST_WEIGHT, REASON_SHARED_INTERESTS + ", ".join(shared)


def score_skills(requester: ProfileSnapshot, candidate: ProfileSnapshot):
    if not requester.skills or not candidate.skills:
        return 0, None
    theirs = [skill.lower() for skill in candidate.skills]
    shared = [
        skill for skill in requester.skills
        if any(terms_match(skill.lower(), other) for other in theirs)
    ]
    if not shared:
        return 0, None
    return len(shared) * SKILL_WEIGHT, REASON_SHARED_SKILLS + ", ".join(shared)


def score_project_ideas(requester: ProfileSnapshot, candidate: ProfileSnapshot):
    shared = shared_terms(
        extract_keywords(requester.project_idea),
        extract_keywords(candidate.project_idea),
    )
    if not shared:
        return 0, None
    named = shared[:MAX_PROJECT_KEYWORDS_IN_REASON]
    return len(shared) * PROJECT_KEYWORD_WEIGHT, REASON_PROJECT_KEYWORDS + ", ".join(named)


DIMENSION_SCORERS = (score_interests, score_skills, score_project_ideas)


def score_profiles(requester: ProfileSnapshot, candidate: ProfileSnapshot) -> MatchScore:
    """Score `candidate` from the point of view of `requester`."""
    result = MatchScore()
    for scorer in DIMENSION_SCORERS:
        points, reason = scorer(requester, candidate)
        if points:
            result.score += points
            result.reasons.append(reason)
    return result
