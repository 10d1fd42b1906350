#!/usr/bin/env python3
"""
Title Similarity - Token-overlap similarity between the candidate's last role
and the job title.
"""

import re
from typing import List, Optional, Set
import logging

from core.config_loader import ScorerConfig

logger = logging.getLogger(__name__)

# Ordered from most junior to most senior
SENIORITY_LEVELS: List[str] = ['intern', 'junior', 'mid', 'senior', 'lead', 'staff', 'principal']

_SENIORITY_ALIASES = {
    'jr': 'junior',
    'sr': 'senior',
    'snr': 'senior',
    'entry': 'junior',
    'associate': 'junior',
    'intermediate': 'mid',
}

# Excluded from the similarity denominator; seniority words still feed seniority_level()
TITLE_STOP_WORDS: Set[str] = {
    'the', 'a', 'an', 'of', 'and', 'for', 'in', 'at', 'to', 'with', '&',
    'i', 'ii', 'iii', 'iv', 'level', 'head', 'chief',
} | set(SENIORITY_LEVELS) | set(_SENIORITY_ALIASES)

_TOKEN = re.compile(r'[a-z0-9+#.]+')


def tokenize_title(title: Optional[str]) -> List[str]:
    if not title:
        return []
    return [t.strip('.') for t in _TOKEN.findall(title.lower()) if t.strip('.')]


def normalize_title(title: Optional[str]) -> str:
    return ' '.join(tokenize_title(title))


def significant_tokens(title: Optional[str]) -> Set[str]:
    return {t for t in tokenize_title(title) if t not in TITLE_STOP_WORDS}


def seniority_level(title: Optional[str]) -> Optional[str]:
    """Highest seniority band named in the title, or None."""
    best = None
    for token in tokenize_title(title):
        level = _SENIORITY_ALIASES.get(token, token)
        if level in SENIORITY_LEVELS:
            if best is None or SENIORITY_LEVELS.index(level) > SENIORITY_LEVELS.index(best):
                best = level
    return best


class TitleMatcher:
    """
    Scores 0..100: exact normalized match is 100, no shared significant token
    is the floor, and partial overlap interpolates linearly between floor and
    ceiling by the share of the job's significant tokens found.
    """

    def __init__(self, config: ScorerConfig):
        self.floor = min(max(0.0, float(config.title_floor)), 100.0)
        self.ceiling = min(max(self.floor, float(config.title_ceiling)), 100.0)

    def match(self, job_title: Optional[str], candidate_last_role: Optional[str]) -> float:
        if not candidate_last_role or not candidate_last_role.strip():
            return 0.0
        if not job_title or not job_title.strip():
            return self.floor

        if normalize_title(job_title) == normalize_title(candidate_last_role):
            return 100.0

        job_tokens = significant_tokens(job_title)
        if not job_tokens:
            # Title made only of stop words ("Senior Lead"); compare raw tokens instead
            job_tokens = set(tokenize_title(job_title))
            candidate_tokens = set(tokenize_title(candidate_last_role))
        else:
            candidate_tokens = significant_tokens(candidate_last_role)

        shared = len(job_tokens & candidate_tokens)
        score = self.floor + (self.ceiling - self.floor) * shared / len(job_tokens)

        logger.debug(
            "Title match %.1f (%r vs %r, shared=%d/%d)",
            score, candidate_last_role, job_title, shared, len(job_tokens)
        )
        return score
