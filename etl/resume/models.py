#!/usr/bin/env python3
"""
Resume Models - Data structures for profile extraction.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from datetime import date

from dateutil import parser as date_parser

from core.exceptions import ExtractionDegraded

import logging
logger = logging.getLogger(__name__)

PROFICIENCY_LEVELS = ('unknown', 'beginner', 'intermediate', 'advanced', 'expert')


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == '':
        return None
    if isinstance(value, date):
        return value
    try:
        return date_parser.isoparse(str(value)).date()
    except (ValueError, TypeError, OverflowError):
        logger.warning(f"Could not parse stored date {value!r}")
        return None


def proficiency_rank(proficiency: Optional[str]) -> int:
    try:
        return PROFICIENCY_LEVELS.index(proficiency or 'unknown')
    except ValueError:
        return 0


@dataclass
class TimelineEntry:
    """One role on the employment timeline."""
    company: str
    role: str
    start_date: date
    end_date: date
    years_in_role: float = 0.0
    is_current: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'company': self.company,
            'role': self.role,
            'startDate': _iso(self.start_date),
            'endDate': _iso(self.end_date),
            'yearsInRole': self.years_in_role,
            'isCurrent': self.is_current,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["TimelineEntry"]:
        start = _parse_date(data.get('startDate') or data.get('start_date'))
        end = _parse_date(data.get('endDate') or data.get('end_date'))
        if start is None or end is None:
            return None
        return cls(
            company=data.get('company') or '',
            role=data.get('role') or '',
            start_date=start,
            end_date=end,
            years_in_role=float(data.get('yearsInRole') or data.get('years_in_role') or 0.0),
            is_current=bool(data.get('isCurrent') or data.get('is_current') or False),
        )


@dataclass
class ExperienceGap:
    """Idle period between two (merged) timeline ranges."""
    start: date
    end: date
    months: int

    def to_dict(self) -> Dict[str, Any]:
        return {'start': _iso(self.start), 'end': _iso(self.end), 'months': self.months}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["ExperienceGap"]:
        start = _parse_date(data.get('start'))
        end = _parse_date(data.get('end'))
        if start is None or end is None:
            return None
        return cls(start=start, end=end, months=int(data.get('months') or 0))


@dataclass
class SkillEntry:
    """A detected skill and the highest proficiency seen for it."""
    skill: str
    proficiency: str = 'unknown'

    def to_dict(self) -> Dict[str, Any]:
        return {'skill': self.skill, 'proficiency': self.proficiency}


@dataclass
class ProfileFragment:
    """Everything ProfileExtractor derives from raw resume text."""
    years_experience: Optional[float] = None
    last_role_title: Optional[str] = None
    timeline: List[TimelineEntry] = field(default_factory=list)
    gaps: List[ExperienceGap] = field(default_factory=list)
    skills: List[SkillEntry] = field(default_factory=list)
    name: Optional[str] = None
    email: Optional[str] = None
    degradations: List[ExtractionDegraded] = field(default_factory=list)

    @property
    def is_degraded(self) -> bool:
        return bool(self.degradations)

    @property
    def skill_names(self) -> List[str]:
        return [s.skill for s in self.skills]


@dataclass
class CandidateProfile:
    """An already-extracted candidate, as consumed by the scorer."""
    id: Optional[int]
    name: str
    email: Optional[str] = None
    raw_text: str = ''
    years_experience: Optional[float] = None
    last_role_title: Optional[str] = None
    experience_timeline: List[TimelineEntry] = field(default_factory=list)
    experience_gaps: List[ExperienceGap] = field(default_factory=list)
    skills: List[SkillEntry] = field(default_factory=list)

    @property
    def skill_names(self) -> List[str]:
        return [s.skill for s in self.skills]

    @classmethod
    def from_fragment(
        cls,
        fragment: ProfileFragment,
        candidate_id: Optional[int] = None,
        name: Optional[str] = None,
        email: Optional[str] = None,
        raw_text: str = ''
    ) -> "CandidateProfile":
        return cls(
            id=candidate_id,
            name=name or fragment.name or 'Unknown Candidate',
            email=email or fragment.email,
            raw_text=raw_text,
            years_experience=fragment.years_experience,
            last_role_title=fragment.last_role_title,
            experience_timeline=list(fragment.timeline),
            experience_gaps=list(fragment.gaps),
            skills=list(fragment.skills),
        )
