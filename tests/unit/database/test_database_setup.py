#!/usr/bin/env python3
"""
Schema creation and engine helpers.
"""

import unittest

import pytest
from sqlalchemy import inspect

from database.database import init_db, make_engine
from tests import TEST_DB_URL


class TestInitDb(unittest.TestCase):

    def test_creates_all_tables(self):
        engine = make_engine("sqlite://")
        init_db(bind=engine)

        tables = set(inspect(engine).get_table_names())
        self.assertEqual(tables, {'job', 'candidate', 'candidate_skill', 'job_candidate', 'score'})

    def test_init_is_repeatable(self):
        engine = make_engine("sqlite://")
        init_db(bind=engine)
        init_db(bind=engine)
        self.assertIn('score', inspect(engine).get_table_names())


@pytest.mark.db
def test_postgres_schema(postgres_session_factory):
    """Score uniqueness holds on PostgreSQL (JSONB columns)."""
    engine = make_engine(TEST_DB_URL)
    init_db(bind=engine)
    constraints = inspect(engine).get_unique_constraints('score')
    assert any(c['name'] == 'uq_score_candidate_job' for c in constraints)
