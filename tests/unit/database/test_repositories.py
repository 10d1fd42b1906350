#!/usr/bin/env python3
"""
Repository tests against an in-memory SQLite schema.
"""

import unittest
from datetime import date

from core.exceptions import ValidationError
from core.scorer.service import ScoringService
from core.scorer.persistence import save_score_to_db
from database.uow import uow
from tests import make_session_factory, make_fragment, seed_job, seed_candidate


class TestJobRepository(unittest.TestCase):

    def setUp(self):
        self.sf = make_session_factory()

    def test_create_job_normalizes_requirements(self):
        with uow(self.sf) as work:
            job = work.jobs.create_job(
                "Data Engineer",
                requirements={"must": ["Python", "python", "SQL"], "nice": ["Airflow"]},
            )
            job_id = job.id

        with uow(self.sf) as work:
            job = work.jobs.get_by_id(job_id)
            self.assertEqual(job.requirements, {"must": ["Python", "SQL"], "nice": ["Airflow"]})
            self.assertEqual(job.rescore_generation, 0)
            self.assertIsNone(job.score_weights)
            self.assertEqual(job.to_job_profile().requirements.must, ["Python", "SQL"])

    def test_create_job_rejects_overlap(self):
        with self.assertRaises(ValidationError):
            with uow(self.sf) as work:
                work.jobs.create_job("Data Engineer", requirements={"must": ["SQL"], "nice": ["sql"]})

        with uow(self.sf) as work:
            self.assertIsNone(work.jobs.get_by_id(1))

    def test_create_job_derives_requirements_from_description(self):
        description = "Required: Python and SQL.\nAirflow is a plus."
        with uow(self.sf) as work:
            derived = work.jobs.create_job("Data Engineer", description=description)
            explicit = work.jobs.create_job(
                "Data Engineer", requirements={"must": ["Go"], "nice": []}, description=description,
            )

        self.assertEqual(derived.requirements, {"must": ["python", "sql"], "nice": ["airflow"]})
        self.assertEqual(derived.description, description)
        self.assertEqual(explicit.requirements, {"must": ["Go"], "nice": []})

    def test_mark_rescored_increments_generation(self):
        job_id = seed_job(self.sf)
        weights = {'skills': 1.0, 'title': 0.0, 'seniority': 0.0, 'recency': 0.0, 'gaps': 0.0}
        with uow(self.sf) as work:
            job = work.jobs.lock_for_update(job_id)
            self.assertEqual(work.jobs.mark_rescored(job, weights), 1)
            self.assertEqual(work.jobs.mark_rescored(job, weights), 2)

        with uow(self.sf) as work:
            job = work.jobs.get_by_id(job_id)
            self.assertEqual(job.rescore_generation, 2)
            self.assertEqual(job.score_weights, weights)


class TestCandidateRepository(unittest.TestCase):

    def setUp(self):
        self.sf = make_session_factory()
        self.job_id = seed_job(self.sf)

    def test_save_candidate_profile_round_trips_to_profile(self):
        fragment = make_fragment(
            skills=["Python", "Docker"],
            years=5.5,
            last_role="Backend Engineer",
            timeline=[("Backend Engineer", date(2019, 1, 1), date(2024, 5, 31))],
            gap_months=[4],
        )
        candidate_id = seed_candidate(self.sf, self.job_id, "Jane Doe", fragment)

        with uow(self.sf) as work:
            profile = work.candidates.get_by_id(candidate_id).to_profile()

        self.assertEqual(profile.name, "Jane Doe")
        self.assertEqual(profile.skill_names, ["Python", "Docker"])
        self.assertEqual(profile.years_experience, 5.5)
        self.assertEqual(profile.experience_timeline[0].end_date, date(2024, 5, 31))
        self.assertEqual(profile.experience_gaps[0].months, 4)

    def test_get_for_job_and_attach_is_idempotent(self):
        a = seed_candidate(self.sf, self.job_id, "Ann Lee", make_fragment())
        b = seed_candidate(self.sf, None, "Bob Ray", make_fragment())

        with uow(self.sf) as work:
            self.assertEqual([c.id for c in work.candidates.get_for_job(self.job_id)], [a])
            work.candidates.attach_to_job(self.job_id, b)
            work.candidates.attach_to_job(self.job_id, b)

        with uow(self.sf) as work:
            self.assertEqual([c.id for c in work.candidates.get_for_job(self.job_id)], [a, b])
            self.assertEqual(work.jobs.get_candidate_ids(self.job_id), [a, b])


class TestScoreRepository(unittest.TestCase):

    def setUp(self):
        self.sf = make_session_factory()
        self.job_id = seed_job(self.sf)
        service = ScoringService()
        self.ids = {}
        for name, skills in (("Ann Lee", ["Python", "AWS", "Docker"]),
                             ("Bob Ray", ["Python"]),
                             ("Cat Kim", ["Python", "AWS"])):
            self.ids[name] = seed_candidate(self.sf, self.job_id, name, make_fragment(skills=skills))

        with uow(self.sf) as work:
            job = work.jobs.get_by_id(self.job_id)
            for candidate in work.candidates.get_for_job(self.job_id):
                scored = service.score_candidate(job, candidate, as_of=date(2024, 6, 1))
                save_score_to_db(scored, work.scores)

    def _ranked_names(self):
        with uow(self.sf) as work:
            return [s.candidate.name for s in work.scores.get_ranked_scores(self.job_id)]

    def test_ranked_by_total_when_no_manual_rank(self):
        self.assertEqual(self._ranked_names(), ["Ann Lee", "Cat Kim", "Bob Ray"])

    def test_manual_rank_comes_first(self):
        with uow(self.sf) as work:
            work.scores.set_manual_rank(self.job_id, self.ids["Bob Ray"], 1)
        self.assertEqual(self._ranked_names(), ["Bob Ray", "Ann Lee", "Cat Kim"])

    def test_update_ai_rank_missing_row(self):
        with uow(self.sf) as work:
            self.assertFalse(work.scores.update_ai_rank(self.job_id, 9999, 1, "n/a"))
            self.assertTrue(work.scores.update_ai_rank(self.job_id, self.ids["Bob Ray"], 1, "Fast learner"))

        with uow(self.sf) as work:
            score = work.scores.get_existing_score(self.ids["Bob Ray"], self.job_id)
            self.assertEqual((score.ai_rank, score.ai_rank_reason), (1, "Fast learner"))

    def test_clear_ai_ranks(self):
        with uow(self.sf) as work:
            work.scores.update_ai_rank(self.job_id, self.ids["Ann Lee"], 2, "x")
        with uow(self.sf) as work:
            self.assertEqual(work.scores.clear_ai_ranks(self.job_id), 1)
        with uow(self.sf) as work:
            self.assertIsNone(work.scores.get_existing_score(self.ids["Ann Lee"], self.job_id).ai_rank)

    def test_set_manual_rank_missing_row(self):
        with uow(self.sf) as work:
            self.assertIsNone(work.scores.set_manual_rank(self.job_id, 9999, 1))


if __name__ == '__main__':
    unittest.main()
