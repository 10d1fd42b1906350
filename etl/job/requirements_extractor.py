#!/usr/bin/env python3
"""
Requirements Extractor - Derive must-have / nice-to-have skills from a job
description.

Skills are found with the same vocabulary and synonym patterns used for
resumes and listed in the order the description first mentions them. Each
skill is classified by the cue words around its first mention:

1. A cue on the mention's own line wins ("Docker experience is a plus").
2. Otherwise the nearest cue before the mention, within CONTEXT_CHARS, wins
   (section headers such as "Requirements:" or "Nice to have:").
3. Otherwise the skill is a must-have while fewer than DEFAULT_MUST_LIMIT
   must-haves were found, else a nice-to-have.
"""

import re
import logging
from typing import Any, Dict, List, Optional, Tuple

from core.scorer.models import JobRequirements
from core.scorer.normalize import normalize_skill
from etl.resume.extractor import SKILL_PATTERNS, sanitize_text

logger = logging.getLogger(__name__)

MUST = 'must'
NICE = 'nice'

MUST_HAVE_CUES = (
    'required', 'requirements', 'must have', 'must-have', 'essential',
    'mandatory', 'minimum', 'years of experience',
)
NICE_TO_HAVE_CUES = (
    'nice to have', 'nice-to-have', 'preferred', 'bonus', 'plus',
    'advantage', 'desirable', 'optional',
)

CONTEXT_CHARS = 100
DEFAULT_MUST_LIMIT = 8
MAX_MUST = 10
MAX_NICE = 8

CUE_RE = re.compile(
    r'\b(?:' + '|'.join(re.escape(c) for c in MUST_HAVE_CUES + NICE_TO_HAVE_CUES) + r')\b'
)
_CUE_KIND: Dict[str, str] = {
    **{c: MUST for c in MUST_HAVE_CUES},
    **{c: NICE for c in NICE_TO_HAVE_CUES},
}


def find_skill_mentions(lowered: str) -> List[Tuple[int, int, str]]:
    """(start, end, skill) of each vocabulary skill's first mention, in text order."""
    first: Dict[str, Tuple[int, int]] = {}
    for skill, pattern in SKILL_PATTERNS:
        match = pattern.search(lowered)
        if match is None:
            continue
        if skill not in first or match.start() < first[skill][0]:
            first[skill] = (match.start(), match.end())
    return sorted(((s, e, skill) for skill, (s, e) in first.items()), key=lambda m: m[0])


def classify_mention(lowered: str, start: int, end: int) -> Optional[str]:
    """MUST / NICE from the cue words around one mention, or None without a cue."""
    line_start = lowered.rfind('\n', 0, start) + 1
    line_end = lowered.find('\n', end)
    if line_end == -1:
        line_end = len(lowered)

    same_line = []
    for cue in CUE_RE.finditer(lowered, line_start, line_end):
        distance = start - cue.end() if cue.end() <= start else cue.start() - end
        same_line.append((abs(distance), _CUE_KIND[cue.group(0)]))
    if same_line:
        return min(same_line)[1]

    window_start = max(0, start - CONTEXT_CHARS)
    preceding = list(CUE_RE.finditer(lowered, window_start, line_start))
    if preceding:
        return _CUE_KIND[preceding[-1].group(0)]
    return None


class RequirementsExtractor:
    """Rule-based must / nice classification of the skills a description names."""

    def extract(self, description: Any) -> JobRequirements:
        """Never raises; an empty or unparseable description gives empty requirements."""
        lowered = sanitize_text(description).lower()
        must: List[str] = []
        nice: List[str] = []
        seen = set()

        for start, end, skill in find_skill_mentions(lowered):
            key = normalize_skill(skill)
            if key in seen:
                continue
            seen.add(key)

            kind = classify_mention(lowered, start, end)
            if kind is None:
                kind = MUST if len(must) < DEFAULT_MUST_LIMIT else NICE

            if kind == MUST and len(must) < MAX_MUST:
                must.append(skill)
            elif kind == NICE and len(nice) < MAX_NICE:
                nice.append(skill)
            else:
                logger.debug(f"Dropping {skill!r}: {kind} list is full")

        logger.debug(f"Derived requirements: must={must} nice={nice}")
        return JobRequirements(must=must, nice=nice)


def extract_requirements(description: Any) -> JobRequirements:
    return RequirementsExtractor().extract(description)
