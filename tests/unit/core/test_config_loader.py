#!/usr/bin/env python3
"""
Unit tests for YAML configuration loading.
"""

import os
import tempfile
import unittest
from unittest.mock import patch

from core.config_loader import AppConfig, load_config


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def _write(self, text):
        path = os.path.join(self.tmpdir.name, "config.yaml")
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_defaults(self):
        config = AppConfig()
        self.assertEqual(config.scorer.must_weight, 2.0)
        self.assertEqual(config.scorer.gap_penalty_per_month, 5.0)
        self.assertEqual(config.extraction.min_gap_months, 2)
        self.assertFalse(config.ai_ranking.enabled)
        weights = config.scorer.default_weights.to_score_weights()
        self.assertTrue(weights.is_normalized())

    @patch.dict(os.environ, {}, clear=True)
    def test_yaml_values_override_defaults(self):
        path = self._write(
            "scorer:\n"
            "  gap_penalty_per_month: 3\n"
            "  default_weights:\n"
            "    skills: 0.6\n"
            "    title: 0.1\n"
            "rescore:\n"
            "  max_workers: 2\n"
        )
        config = load_config(path)
        self.assertEqual(config.scorer.gap_penalty_per_month, 3.0)
        self.assertEqual(config.scorer.default_weights.skills, 0.6)
        self.assertEqual(config.scorer.default_weights.recency, 0.1)
        self.assertEqual(config.rescore.max_workers, 2)

    @patch.dict(os.environ, {}, clear=True)
    def test_empty_file(self):
        config = load_config(self._write(""))
        self.assertEqual(config.database.url, "sqlite:///resumerank.db")

    @patch.dict(os.environ, {
        "DATABASE_URL": "postgresql://u:p@db/resumerank",
        "REDIS_URL": "redis://cache:6379/0",
        "LLM_BASE_URL": "http://llm:8080/v1",
        "LLM_API_KEY": "secret",
    }, clear=True)
    def test_env_overrides(self):
        config = load_config(self._write("database:\n  url: sqlite:///other.db\n"))
        self.assertEqual(config.database.url, "postgresql://u:p@db/resumerank")
        self.assertEqual(config.ai_ranking.redis_url, "redis://cache:6379/0")
        self.assertEqual(config.ai_ranking.base_url, "http://llm:8080/v1")
        self.assertEqual(config.ai_ranking.api_key, "secret")


if __name__ == '__main__':
    unittest.main()
