"""
Keyword Extractor

Splits free-text profile fields into lowercase tokens for matching.
"""

import re
from typing import List, Optional

from .constants import TOKEN_SPLIT_PATTERN, MIN_TOKEN_LENGTH_EXCLUSIVE

_SPLIT_RE = re.compile(TOKEN_SPLIT_PATTERN)


def extract_keywords(text: Optional[str]) -> List[str]:
    """
    Return the tokens of `text` longer than two characters, in order of
    appearance. Repeated tokens are kept, so each occurrence can score.
    """
    if not text:
        return []
    return [
        token
        for token in _SPLIT_RE.split(text.lower())
        if len(token) > MIN_TOKEN_LENGTH_EXCLUSIVE
    ]
