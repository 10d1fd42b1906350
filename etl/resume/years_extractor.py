#!/usr/bin/env python3
"""
Years Extractor - Extract claimed years of experience from resume text.

Distinguishes total-experience claims ("8+ years of professional experience")
from skill-specific ones ("3 years of Python").
"""
import re
from typing import Tuple, Optional
import logging

logger = logging.getLogger(__name__)

# Claims above this are treated as parse noise (phone numbers, years like "2019 years")
MAX_PLAUSIBLE_YEARS = 60.0


class YearsExtractor:
    """Extract years of experience using regex patterns."""

    total_patterns = [
        r'(\d+(?:\.\d+)?)\+?\s*years?\s+(?:of\s+)?(?:total\s+)?(?:professional\s+)?(?:industry\s+)?(?:career\s+)?(?:overall\s+)?experience',
        r'total\s+(?:of\s+)?(\d+(?:\.\d+)?)\+?\s*years?',
        r'over\s+(\d+(?:\.\d+)?)\+?\s*years?\s+(?:of\s+)?(?:professional\s+)?experience',
        r'experience\s*(?:of|:)?\s*(\d+(?:\.\d+)?)\+?\s*years?',
    ]

    years_patterns = [
        r'(\d+(?:\.\d+)?)\+?\s*years?\s+(?:of\s+)?([^,.;\n]+)',
        r'(\d+(?:\.\d+)?)\+?\s*yrs?\s+(?:of\s+)?([^,.;\n]+)',
    ]

    def extract_from_text(self, text: Optional[str]) -> Tuple[Optional[float], Optional[str], bool]:
        """
        Extract years of experience from text using semantic patterns.

        Returns:
            (years_value, years_context, is_total_claim)
        """
        if not text:
            return None, None, False

        text_lower = text.lower()

        for pattern in self.total_patterns:
            for match in re.finditer(pattern, text_lower):
                years = float(match.group(1))
                if 0 <= years <= MAX_PLAUSIBLE_YEARS:
                    return years, "total", True

        for pattern in self.years_patterns:
            for match in re.finditer(pattern, text_lower):
                years = float(match.group(1))
                if not 0 <= years <= MAX_PLAUSIBLE_YEARS:
                    continue
                context = match.group(2).strip()
                context = re.sub(r'\s+', ' ', context)
                context = re.sub(r'^(?:of|in|with|using)\s+', '', context)
                return years, context, False

        return None, None, False

    def extract_total_years(self, text: Optional[str]) -> Optional[float]:
        """Only an explicit total-experience claim counts."""
        years, _, is_total = self.extract_from_text(text)
        if is_total:
            logger.debug(f"Found total experience claim: {years} years")
            return years
        return None
