#!/usr/bin/env python3
"""
Skill Normalization - Canonical spelling used for all skill comparisons.

Names are stored as entered; only comparisons go through normalize_skill().
"""

import re
from typing import Dict, Iterable, List, Optional

# Spelling variants folded onto one canonical name before matching
SKILL_ALIASES: Dict[str, str] = {
    'js': 'javascript',
    'ts': 'typescript',
    'k8s': 'kubernetes',
    'postgres': 'postgresql',
    'psql': 'postgresql',
    'golang': 'go',
    'nodejs': 'node.js',
    'node js': 'node.js',
    'reactjs': 'react',
    'react js': 'react',
    'vuejs': 'vue',
    'nextjs': 'next.js',
    'amazon web services': 'aws',
    'google cloud': 'gcp',
    'google cloud platform': 'gcp',
    'ms azure': 'azure',
    'restful api': 'rest api',
    'restful apis': 'rest api',
    'rest apis': 'rest api',
    'ci cd': 'ci/cd',
    'cicd': 'ci/cd',
}

_WHITESPACE = re.compile(r'\s+')


def normalize_skill(skill: Optional[str], aliases: Optional[Dict[str, str]] = None) -> str:
    """Lowercase, trim, collapse whitespace and apply the alias table."""
    if not skill:
        return ''
    value = _WHITESPACE.sub(' ', str(skill).strip().lower())
    table = SKILL_ALIASES if aliases is None else aliases
    return table.get(value, value)


def dedupe_skills(skills: Iterable[str]) -> List[str]:
    """Ordered set: drop blanks and case-insensitive repeats, first spelling wins."""
    seen = set()
    result = []
    for skill in skills or []:
        if skill is None:
            continue
        key = normalize_skill(skill)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(str(skill).strip())
    return result
