#!/usr/bin/env python3
"""
Unit tests for timeline merging and gap detection.
"""

import unittest
from datetime import date

from etl.resume.models import TimelineEntry
from etl.resume.timeline import (
    build_timeline,
    detect_gaps,
    find_date_ranges,
    merge_overlapping,
    parse_date_token,
    span_months,
    whole_months,
)


def _entry(role, start, end, current=False):
    return TimelineEntry(company="Acme", role=role, start_date=start, end_date=end, is_current=current)


class TestParseDateToken(unittest.TestCase):

    def test_month_year(self):
        self.assertEqual(parse_date_token("Mar 2017"), date(2017, 3, 1))
        self.assertEqual(parse_date_token("March, 2017", is_end=True), date(2017, 3, 31))

    def test_year_only(self):
        self.assertEqual(parse_date_token("2015"), date(2015, 1, 1))
        self.assertEqual(parse_date_token("2015", is_end=True), date(2015, 12, 31))

    def test_numeric_forms(self):
        self.assertEqual(parse_date_token("03/2019"), date(2019, 3, 1))
        self.assertEqual(parse_date_token("2019-03"), date(2019, 3, 1))
        self.assertEqual(parse_date_token("2020-02", is_end=True), date(2020, 2, 29))

    def test_invalid(self):
        self.assertIsNone(parse_date_token("13/2019"))
        self.assertIsNone(parse_date_token("sometime"))


class TestFindDateRanges(unittest.TestCase):

    AS_OF = date(2024, 6, 15)

    def test_present_resolves_to_as_of(self):
        ranges = find_date_ranges("Engineer | Jan 2021 - Present", self.AS_OF)
        self.assertEqual(len(ranges), 1)
        _, start, end, current = ranges[0]
        self.assertEqual((start, end, current), (date(2021, 1, 1), self.AS_OF, True))

    def test_reversed_range_dropped(self):
        self.assertEqual(find_date_ranges("Engineer 2020 - 2018", self.AS_OF), [])

    def test_words_starting_with_month_names_are_not_dates(self):
        self.assertEqual(find_date_ranges("Marketing Decisions Juniper", self.AS_OF), [])

    def test_to_separator(self):
        ranges = find_date_ranges("Analyst, Beta (2016 to 2018)", self.AS_OF)
        self.assertEqual([(r[1], r[2]) for r in ranges], [(date(2016, 1, 1), date(2018, 12, 31))])


class TestTimeline(unittest.TestCase):
    """Unit tests for merge_overlapping / detect_gaps."""

    def test_01_six_month_gap(self):
        print("\n🗓️ UNIT Test 1: Six month gap")
        merged, gaps = build_timeline([
            _entry("Engineer", date(2018, 1, 1), date(2019, 12, 31)),
            _entry("Senior Engineer", date(2020, 7, 1), date(2022, 12, 31)),
        ])

        self.assertEqual(len(merged), 2)
        self.assertEqual(len(gaps), 1)
        self.assertEqual(gaps[0].months, 6)
        self.assertEqual((gaps[0].start, gaps[0].end), (date(2019, 12, 31), date(2020, 7, 1)))
        print(f"  ✓ Gap: {gaps[0].months} months")

    def test_02_contained_role_does_not_create_artifact_gap(self):
        merged, gaps = build_timeline([
            _entry("Side Project", date(2016, 1, 1), date(2017, 12, 31)),
            _entry("Platform Engineer", date(2015, 1, 1), date(2022, 12, 31)),
            _entry("Staff Engineer", date(2023, 1, 1), date(2024, 1, 1)),
        ])

        self.assertEqual(len(merged), 2)
        self.assertEqual(merged[0].start_date, date(2015, 1, 1))
        self.assertEqual(merged[0].end_date, date(2022, 12, 31))
        self.assertEqual(merged[0].role, "Platform Engineer")
        self.assertEqual(gaps, [])

    def test_03_overlap_keeps_later_ending_label(self):
        merged = merge_overlapping([
            _entry("Engineer", date(2018, 1, 1), date(2020, 6, 30)),
            _entry("Lead Engineer", date(2019, 6, 1), date(2021, 12, 31), current=True),
        ])

        self.assertEqual(len(merged), 1)
        self.assertEqual(merged[0].role, "Lead Engineer")
        self.assertTrue(merged[0].is_current)
        self.assertEqual(merged[0].years_in_role, 4.0)

    def test_04_merge_does_not_mutate_input(self):
        entries = [
            _entry("B", date(2019, 1, 1), date(2020, 1, 1)),
            _entry("A", date(2018, 1, 1), date(2019, 6, 1)),
        ]
        merge_overlapping(entries)
        self.assertEqual([e.role for e in entries], ["B", "A"])
        self.assertEqual(entries[0].end_date, date(2020, 1, 1))

    def test_05_threshold_is_exclusive(self):
        merged = [
            _entry("A", date(2018, 1, 1), date(2018, 12, 31)),
            _entry("B", date(2019, 3, 1), date(2020, 12, 31)),
        ]
        self.assertEqual(detect_gaps(merged, min_gap_months=2), [])
        self.assertEqual([g.months for g in detect_gaps(merged, min_gap_months=1)], [2])

    def test_05b_partial_month_over_threshold_is_reported(self):
        merged = [
            _entry("A", date(2018, 1, 1), date(2018, 12, 31)),
            _entry("B", date(2019, 3, 21), date(2020, 12, 31)),
        ]
        gaps = detect_gaps(merged, min_gap_months=2)

        self.assertEqual(len(gaps), 1)
        self.assertEqual(gaps[0].months, 2)
        self.assertEqual((gaps[0].start, gaps[0].end), (date(2018, 12, 31), date(2019, 3, 21)))

    def test_06_adjacent_roles_have_no_gap(self):
        _, gaps = build_timeline([
            _entry("A", date(2018, 1, 1), date(2018, 12, 31)),
            _entry("B", date(2019, 1, 1), date(2019, 12, 31)),
        ])
        self.assertEqual(gaps, [])

    def test_07_empty(self):
        self.assertEqual(build_timeline([]), ([], []))

    def test_span_months_counts_final_month(self):
        self.assertEqual(span_months(date(2016, 1, 1), date(2018, 12, 31)), 36)
        self.assertEqual(span_months(date(2020, 1, 1), date(2020, 1, 31)), 1)
        self.assertEqual(span_months(date(2020, 1, 1), date(2020, 1, 15)), 0)

    def test_whole_months(self):
        self.assertEqual(whole_months(date(2020, 1, 15), date(2020, 3, 14)), 1)
        self.assertEqual(whole_months(date(2020, 3, 1), date(2020, 1, 1)), 0)


if __name__ == '__main__':
    unittest.main()
