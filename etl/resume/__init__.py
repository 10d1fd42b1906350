#!/usr/bin/env python3
"""
Resume Extraction Module - derive candidate profiles from raw resume text.

Handles:
- Rule-based profile extraction (timeline, gaps, years, last role, skills)
- Validation and merge of externally extracted profile data
"""
from etl.resume.models import (
    CandidateProfile,
    ProfileFragment,
    TimelineEntry,
    ExperienceGap,
    SkillEntry,
)
from etl.resume.extractor import ProfileExtractor, extract_profile
from etl.resume.ai_fragment import merge_ai_extraction, AIProfileExtraction

__all__ = [
    'CandidateProfile',
    'ProfileFragment',
    'TimelineEntry',
    'ExperienceGap',
    'SkillEntry',
    'ProfileExtractor',
    'extract_profile',
    'merge_ai_extraction',
    'AIProfileExtraction',
]
