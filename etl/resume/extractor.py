#!/usr/bin/env python3
"""
Profile Extractor - Derive a scoreable candidate profile from raw resume text.

Handles:
1. Dated role mentions -> sorted, merged employment timeline and gaps
2. Years of experience (explicit claim, else merged timeline span)
3. Last role title (latest timeline entry, else a known title in the document head)
4. Skills from the maintained vocabulary, with proficiency cues
5. Candidate name and email

Extraction never raises. Fields that cannot be determined fall back to
conservative defaults and are recorded as ExtractionDegraded entries.
"""
import re
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from core.config_loader import ExtractionConfig
from core.exceptions import ExtractionDegraded
from etl.resume.models import ProfileFragment, TimelineEntry, SkillEntry, proficiency_rank
from etl.resume.timeline import build_timeline, find_date_ranges, span_months, span_years
from etl.resume.vocabulary import (
    SKILL_VOCABULARY,
    SKILL_SYNONYMS,
    KNOWN_TITLES,
    TITLE_KEYWORDS,
    PROFICIENCY_CUES,
)
from etl.resume.years_extractor import YearsExtractor

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}')
NAME_WORD_RE = re.compile(r"[A-Z][a-z]+(?:[-'][A-Z]?[a-z]+)*")
CONTROL_CHARS_RE = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')
LABEL_SPLIT_RE = re.compile(r'\s+at\s+|\s*[|,@•·]\s*|\s+[-–—]\s+', re.IGNORECASE)

NAME_SEARCH_LINES = 10
SECTION_HEADERS = {
    'summary', 'experience', 'work experience', 'education', 'skills',
    'projects', 'contact', 'profile', 'objective', 'curriculum vitae', 'resume',
}


def _term_pattern(term: str) -> re.Pattern:
    # Boundaries exclude characters that are part of skill names (c++, c#, .net)
    return re.compile(r'(?<![\w+#.])' + re.escape(term) + r'(?![\w+#])')


def _build_skill_patterns() -> List[Tuple[str, re.Pattern]]:
    patterns = [(skill, _term_pattern(skill)) for skill in SKILL_VOCABULARY]
    patterns.extend((canonical, _term_pattern(alias)) for alias, canonical in SKILL_SYNONYMS.items())
    return patterns


SKILL_PATTERNS = _build_skill_patterns()
CUE_PATTERNS = [
    (level, [re.compile(r'\b' + re.escape(cue) + r'\b') for cue in cues])
    for level, cues in PROFICIENCY_CUES
]
TITLE_PATTERNS = [
    (title, re.compile(r'\b' + re.escape(title) + r'\b', re.IGNORECASE))
    for title in sorted(KNOWN_TITLES, key=len, reverse=True)
]


def sanitize_text(raw_text: Any) -> str:
    """Coerce any input to printable text."""
    if raw_text is None:
        return ''
    if isinstance(raw_text, (bytes, bytearray)):
        raw_text = bytes(raw_text).decode('utf-8', errors='replace')
    elif not isinstance(raw_text, str):
        raw_text = str(raw_text)
    return CONTROL_CHARS_RE.sub(' ', raw_text)


def _looks_like_title(fragment: str) -> bool:
    lowered = fragment.lower()
    return any(re.search(r'\b' + kw + r'\b', lowered) for kw in TITLE_KEYWORDS)


def split_role_company(label: str) -> Tuple[str, str]:
    """Split 'Senior Engineer, Acme Corp' style labels into (role, company)."""
    parts = [p.strip(' ()[]:;-–—\t') for p in LABEL_SPLIT_RE.split(label)]
    parts = [p for p in parts if p]
    if not parts:
        return '', ''

    role_idx = next((i for i, p in enumerate(parts) if _looks_like_title(p)), 0)
    role = parts[role_idx]
    company = next((p for i, p in enumerate(parts) if i != role_idx), '')
    return role, company


class ProfileExtractor:
    """
    Rule-based extractor for candidate profiles.

    Holds only immutable configuration, so one instance can be shared across
    threads.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        self.years_extractor = YearsExtractor()

    def extract(self, raw_text: Any, as_of: Optional[date] = None) -> ProfileFragment:
        """
        Extract a ProfileFragment from raw resume text.

        Args:
            raw_text: Extracted resume text (None, bytes and garbage are tolerated)
            as_of: Date that "Present" resolves to (defaults to today)

        Returns:
            ProfileFragment; degradations lists every field that fell back
        """
        as_of = as_of or date.today()
        try:
            return self._extract(sanitize_text(raw_text), as_of)
        except Exception as e:
            logger.warning(f"Profile extraction failed, returning empty profile: {e}")
            fragment = ProfileFragment()
            fragment.degradations.append(ExtractionDegraded('profile', 'extraction failed', str(e)))
            return fragment

    def extract_many(
        self,
        texts: Iterable[Any],
        max_workers: Optional[int] = None,
        as_of: Optional[date] = None
    ) -> List[ProfileFragment]:
        """Extract several resumes in parallel; results keep input order."""
        texts = list(texts)
        if not texts:
            return []
        workers = max(1, max_workers or self.config.max_workers)
        as_of = as_of or date.today()
        with ThreadPoolExecutor(max_workers=workers) as pool:
            fragments = list(pool.map(lambda t: self.extract(t, as_of=as_of), texts))
        logger.info(f"Extracted {len(fragments)} profiles with {workers} workers")
        return fragments

    def _extract(self, text: str, as_of: date) -> ProfileFragment:
        fragment = ProfileFragment()
        lines = text.splitlines()

        entries = self.extract_timeline_entries(lines, as_of)
        fragment.timeline, fragment.gaps = build_timeline(entries, self.config.min_gap_months)
        if not fragment.timeline:
            fragment.degradations.append(ExtractionDegraded('timeline', 'no dated roles found'))

        fragment.years_experience = self.extract_years(text, fragment.timeline)
        if fragment.years_experience is None:
            fragment.degradations.append(
                ExtractionDegraded('years_experience', 'no claim and no timeline')
            )

        fragment.last_role_title = self.extract_last_role(text, fragment.timeline)
        if fragment.last_role_title is None:
            fragment.degradations.append(ExtractionDegraded('last_role_title', 'no role found'))

        fragment.skills = self.extract_skills(lines)
        fragment.name = self.extract_name(lines)
        fragment.email = self.extract_email(text)

        if fragment.degradations:
            logger.debug(
                "Degraded extraction: %s",
                ', '.join(d.field for d in fragment.degradations)
            )
        return fragment

    def extract_timeline_entries(self, lines: List[str], as_of: date) -> List[TimelineEntry]:
        """Every dated role mention, in document order."""
        entries = []
        previous_label = ''
        for line in lines:
            stripped = line.strip()
            if not stripped:
                continue

            ranges = find_date_ranges(stripped, as_of)
            if not ranges:
                previous_label = stripped
                continue

            # Label text is the line minus its date ranges, else the preceding line
            label = stripped
            for match, _, _, _ in reversed(ranges):
                label = label[:match.start()] + ' ' + label[match.end():]
            label = label.strip(' |,()-–—\t')
            if not re.search(r'[A-Za-z]', label):
                label = previous_label

            role, company = split_role_company(label)
            for _, start, end, current in ranges:
                entries.append(TimelineEntry(
                    company=company,
                    role=role,
                    start_date=start,
                    end_date=end,
                    years_in_role=span_years(start, end),
                    is_current=current,
                ))
        return entries

    def extract_years(self, text: str, timeline: List[TimelineEntry]) -> Optional[float]:
        claimed = self.years_extractor.extract_total_years(text)
        if claimed is not None:
            return claimed
        if timeline:
            months = sum(span_months(e.start_date, e.end_date) for e in timeline)
            return round(months / 12.0, 1)
        return None

    def extract_last_role(self, text: str, timeline: List[TimelineEntry]) -> Optional[str]:
        if timeline and timeline[-1].role:
            return timeline[-1].role

        head = text[:self.config.head_chars]
        for _, pattern in TITLE_PATTERNS:
            match = pattern.search(head)
            if match:
                return match.group(0)
        return None

    def extract_skills(self, lines: List[str]) -> List[SkillEntry]:
        """Vocabulary skills in first-mention order, highest proficiency kept."""
        found: Dict[str, SkillEntry] = {}
        for line in lines:
            lowered = line.lower()
            if not lowered.strip():
                continue
            level = self._proficiency_for(lowered)
            for skill, pattern in SKILL_PATTERNS:
                if not pattern.search(lowered):
                    continue
                existing = found.get(skill)
                if existing is None:
                    found[skill] = SkillEntry(skill=skill, proficiency=level)
                elif proficiency_rank(level) > proficiency_rank(existing.proficiency):
                    existing.proficiency = level
        return list(found.values())

    @staticmethod
    def _proficiency_for(lowered_line: str) -> str:
        for level, patterns in CUE_PATTERNS:
            if any(p.search(lowered_line) for p in patterns):
                return level
        return 'unknown'

    @staticmethod
    def extract_name(lines: List[str]) -> Optional[str]:
        for line in lines[:NAME_SEARCH_LINES]:
            stripped = line.strip()
            words = stripped.split()
            if not 2 <= len(words) <= 4:
                continue
            if stripped.lower() in SECTION_HEADERS or _looks_like_title(stripped):
                continue
            if all(NAME_WORD_RE.fullmatch(w) for w in words):
                return stripped
        return None

    @staticmethod
    def extract_email(text: str) -> Optional[str]:
        match = EMAIL_RE.search(text)
        return match.group(0) if match else None


_default_extractor = ProfileExtractor()


def extract_profile(raw_text: Any, as_of: Optional[date] = None) -> ProfileFragment:
    """Module-level convenience wrapper around a default ProfileExtractor."""
    return _default_extractor.extract(raw_text, as_of=as_of)
