#!/usr/bin/env python3
"""
Employment timeline construction.

Dated role mentions are sorted by start date, overlapping ranges are merged,
and idle periods between the merged ranges become ExperienceGap records.
"""

import re
import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from etl.resume.models import TimelineEntry, ExperienceGap

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    r"\b(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)

DATE_TOKEN = (
    r'(?:' + MONTH_NAMES + r'\s*,?\s*\d{4}'
    r'|\d{1,2}/\d{4}'
    r'|\d{4}[-/]\d{1,2}(?![-/]?\d)'
    r'|(?:19|20)\d{2})'
)

PRESENT_TOKEN = r'(?:present|current|now|today|ongoing)'

DATE_RANGE_RE = re.compile(
    r'(?P<start>' + DATE_TOKEN + r')\s*(?:-|–|—|to|until|through)\s*'
    r'(?P<end>' + DATE_TOKEN + r'|' + PRESENT_TOKEN + r')',
    re.IGNORECASE,
)


def whole_months(start: date, end: date) -> int:
    """Whole months between two dates, floored; never negative."""
    if end <= start:
        return 0
    delta = relativedelta(end, start)
    return delta.years * 12 + delta.months


def span_months(start: date, end: date) -> int:
    """Whole months covered by a role whose end date is inclusive ("2016 - 2018" is 36)."""
    return whole_months(start, end + timedelta(days=1))


def span_years(start: date, end: date) -> float:
    return round(span_months(start, end) / 12.0, 1)


def is_present(token: str) -> bool:
    return bool(re.fullmatch(PRESENT_TOKEN, token.strip(), re.IGNORECASE))


def parse_date_token(token: str, is_end: bool = False) -> Optional[date]:
    """
    Parse a single date token from a resume date range.

    Month-precision dates resolve to the first of the month for range starts
    and the last day of the month for range ends; year-only dates resolve to
    Jan 1 / Dec 31.
    """
    token = token.strip().rstrip('.').replace(',', ' ')
    try:
        if re.fullmatch(r'(?:19|20)\d{2}', token):
            year = int(token)
            return date(year, 12, 31) if is_end else date(year, 1, 1)

        m = re.fullmatch(r'(\d{1,2})/(\d{4})', token)
        if m:
            parsed = date(int(m.group(2)), int(m.group(1)), 1)
        else:
            m = re.fullmatch(r'(\d{4})[-/](\d{1,2})', token)
            if m:
                parsed = date(int(m.group(1)), int(m.group(2)), 1)
            else:
                parsed = date_parser.parse(token, default=datetime(2000, 1, 1)).date().replace(day=1)
    except (ValueError, OverflowError) as e:
        logger.debug(f"Unparseable date token {token!r}: {e}")
        return None

    if is_end:
        parsed = parsed + relativedelta(day=31)
    return parsed


def find_date_ranges(line: str, as_of: date) -> List[Tuple[re.Match, date, date, bool]]:
    """All (match, start, end, is_current) ranges on a line; reversed ranges are dropped."""
    ranges = []
    for match in DATE_RANGE_RE.finditer(line):
        start = parse_date_token(match.group('start'))
        end_token = match.group('end')
        current = is_present(end_token)
        end = as_of if current else parse_date_token(end_token, is_end=True)
        if start is None or end is None:
            continue
        if end < start:
            logger.debug(f"Skipping reversed date range {match.group(0)!r}")
            continue
        ranges.append((match, start, end, current))
    return ranges


def sort_entries(entries: List[TimelineEntry]) -> List[TimelineEntry]:
    """Ascending by start date; ties keep document order."""
    return sorted(entries, key=lambda e: e.start_date)


def merge_overlapping(entries: List[TimelineEntry]) -> List[TimelineEntry]:
    """
    Merge entries whose date ranges overlap.

    Entries are sorted first. When the next entry starts on or before the
    current merged end, the merged range is extended to the later end date.
    The merged entry carries the labels of the role that ends last, so the
    most recent role title survives.
    """
    ordered = sort_entries(entries)
    if not ordered:
        return []

    merged: List[TimelineEntry] = []
    current = ordered[0]
    i = 1
    while i < len(ordered):
        nxt = ordered[i]
        if nxt.start_date <= current.end_date:
            later = nxt if nxt.end_date > current.end_date else current
            current = TimelineEntry(
                company=later.company,
                role=later.role,
                start_date=current.start_date,
                end_date=max(current.end_date, nxt.end_date),
                is_current=current.is_current or nxt.is_current,
            )
        else:
            merged.append(current)
            current = nxt
        i += 1
    merged.append(current)

    return [
        replace(entry, years_in_role=span_years(entry.start_date, entry.end_date))
        for entry in merged
    ]


def detect_gaps(merged: List[TimelineEntry], min_gap_months: int = 2) -> List[ExperienceGap]:
    """
    Idle periods between consecutive merged ranges that exceed min_gap_months.

    The idle interval runs from the day after end[i] to start[i+1]. It is
    compared to the threshold at day precision, so 2 months 20 days exceeds
    a 2 month minimum while exactly 2 months does not. The recorded
    ``months`` is the whole-month floor of the interval.
    """
    gaps = []
    for i in range(len(merged) - 1):
        prev_end = merged[i].end_date
        next_start = merged[i + 1].start_date
        idle_from = prev_end + timedelta(days=1)
        if next_start <= idle_from:
            continue
        idle = relativedelta(next_start, idle_from)
        months = idle.years * 12 + idle.months
        if months < min_gap_months or (months == min_gap_months and not idle.days):
            continue
        gaps.append(ExperienceGap(start=prev_end, end=next_start, months=months))
    return gaps


def build_timeline(
    entries: List[TimelineEntry],
    min_gap_months: int = 2
) -> Tuple[List[TimelineEntry], List[ExperienceGap]]:
    """Sorted, merged timeline plus the gaps between its ranges."""
    merged = merge_overlapping(entries)
    return merged, detect_gaps(merged, min_gap_months)
