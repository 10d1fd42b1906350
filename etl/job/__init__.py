#!/usr/bin/env python3
"""
Job Extraction Module - derive scoreable requirements from job descriptions.
"""
from etl.job.requirements_extractor import RequirementsExtractor, extract_requirements

__all__ = [
    'RequirementsExtractor',
    'extract_requirements',
]
