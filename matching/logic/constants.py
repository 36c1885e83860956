"""
Matching Engine Constants

Thesaurus, suffix list and scoring weights used by the normalizer and the
scorer. Deterministic lookups only, no learned components.
"""

from typing import Dict, FrozenSet, Tuple

# =============================================================================
# TEXT NORMALIZATION
# =============================================================================

# Removed anywhere in a word before comparison
SEPARATOR_CHARS: Tuple[str, ...] = ("-", "_")

# At most one of these is stripped from the end of a word
STRIP_SUFFIXES: Tuple[str, ...] = ("s", "ing", "ed", "er", "ly")

# Canonical concept -> accepted surface forms.
# Two words are similar when both stems appear in the same entry.
WORD_VARIATIONS: Dict[str, FrozenSet[str]] = {
    "university": frozenset({"university", "uni", "college", "school"}),
    "management": frozenset({"management", "manage", "admin", "administration"}),
    "system": frozenset({"system", "platform", "app", "application"}),
    "student": frozenset({"student", "learner", "user", "member"}),
    "matching": frozenset({"matching", "match", "connect", "pairing"}),
    "project": frozenset({"project", "assignment", "task", "work"}),
    "web": frozenset({"web", "website", "site", "online"}),
    "mobile": frozenset({"mobile", "app", "application", "phone"}),
    "ai": frozenset({"ai", "artificial", "intelligence", "machine"}),
    "data": frozenset({"data", "database", "information", "analytics"}),
}

# =============================================================================
# KEYWORD EXTRACTION
# =============================================================================

# Tokens split on runs of comma, whitespace, hyphen, underscore
TOKEN_SPLIT_PATTERN = r"[,\s\-_]+"

# Tokens of this length or shorter are dropped
MIN_TOKEN_LENGTH_EXCLUSIVE = 2

# =============================================================================
# SCORING
# =============================================================================

INTEREST_WEIGHT = 2
SKILL_WEIGHT = 3
PROJECT_KEYWORD_WEIGHT = 1

# Raw score that maps to 100% compatibility
SATURATION_SCORE = 10
MAX_COMPATIBILITY = 100

# Only this many shared project keywords are named in the reason message
MAX_PROJECT_KEYWORDS_IN_REASON = 3

REASON_SHARED_INTERESTS = "Shared interests: "
REASON_SHARED_SKILLS = "Shared skills: "
REASON_PROJECT_KEYWORDS = "Similar project keywords: "
