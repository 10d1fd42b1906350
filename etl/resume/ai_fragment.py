#!/usr/bin/env python3
"""
Validation of externally extracted resume data.

An external model may return {"skills": [...], "yearsExperience": n,
"jobTitle": "..."} for a resume. The payload is validated with pydantic and
only fills fields the rule-based extractor could not determine.
"""
import logging
from dataclasses import replace
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.scorer.normalize import normalize_skill
from etl.resume.models import ProfileFragment, SkillEntry

logger = logging.getLogger(__name__)


class AIProfileExtraction(BaseModel):
    """Structured resume facts returned by an external model."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    skills: List[str] = Field(default_factory=list, description="Technical skills mentioned")
    years_experience: Optional[float] = Field(
        default=None, alias='yearsExperience', ge=0, le=60,
        description="Total professional experience in years"
    )
    job_title: Optional[str] = Field(
        default=None, alias='jobTitle', description="Most recent job title"
    )
    relevant_experience: List[str] = Field(default_factory=list, alias='relevantExperience')

    @field_validator('skills', mode='before')
    @classmethod
    def _keep_string_skills(cls, value):
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValueError("skills must be a list")
        return [s.strip() for s in value if isinstance(s, str) and s.strip()]

    @field_validator('job_title', mode='before')
    @classmethod
    def _blank_title_is_none(cls, value):
        if isinstance(value, str) and value.strip().lower() in ('', 'null', 'none', 'n/a'):
            return None
        return value


def parse_ai_extraction(payload: Any) -> Optional[AIProfileExtraction]:
    """Validated payload, or None when it is malformed."""
    if payload is None:
        return None
    try:
        if isinstance(payload, (str, bytes)):
            return AIProfileExtraction.model_validate_json(payload)
        return AIProfileExtraction.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Ignoring malformed AI extraction payload: {e.error_count()} error(s)")
        return None


def merge_ai_extraction(fragment: ProfileFragment, payload: Any) -> ProfileFragment:
    """
    Fill undetermined fields of a fragment from an AI extraction payload.

    Deterministically extracted values always win. Skills are unioned; AI-only
    skills get proficiency 'unknown'. Returns a new fragment.
    """
    extraction = parse_ai_extraction(payload)
    if extraction is None:
        return fragment

    filled = set()
    years = fragment.years_experience
    if years is None and extraction.years_experience is not None:
        years = extraction.years_experience
        filled.add('years_experience')

    last_role = fragment.last_role_title
    if last_role is None and extraction.job_title:
        last_role = extraction.job_title.strip()
        filled.add('last_role_title')

    skills = list(fragment.skills)
    known = {normalize_skill(s.skill) for s in skills}
    for name in extraction.skills:
        key = normalize_skill(name)
        if key and key not in known:
            known.add(key)
            skills.append(SkillEntry(skill=key))

    if filled:
        logger.info(f"AI extraction filled: {', '.join(sorted(filled))}")

    return replace(
        fragment,
        years_experience=years,
        last_role_title=last_role,
        skills=skills,
        degradations=[d for d in fragment.degradations if d.field not in filled],
    )
