#!/usr/bin/env python3
"""
Tests for AI ranking queue entry points (Redis / RQ are mocked).
"""

import unittest
from datetime import date
from unittest.mock import MagicMock, patch

from core.config_loader import AIRankingConfig
from core.scorer.service import ScoringService
from pipeline.control import RescoreController
from pipeline.rescore import RescoreOrchestrator
from ranking.service import AIRankingService
from ranking.tasks import enqueue_ai_ranking, process_ai_ranking_task
from tests import InMemoryRedis, make_session_factory, make_fragment, seed_job, seed_candidate


class TestProcessAIRankingTask(unittest.TestCase):

    def test_runs_rank_and_save(self):
        service = MagicMock()
        service.rank_and_save.return_value = 4
        self.assertEqual(process_ai_ranking_task(12, service=service), 4)
        service.rank_and_save.assert_called_once_with(12)

    @patch('ranking.tasks._build_ranking_service', return_value=None)
    def test_disabled_overlay_is_a_no_op(self, mock_build):
        self.assertEqual(process_ai_ranking_task(12), 0)
        mock_build.assert_called_once()


class TestEnqueueAIRanking(unittest.TestCase):

    def test_sync_mode_when_queue_disabled(self):
        print("\n📬 UNIT Test: Sync fallback")
        service = MagicMock()
        config = AIRankingConfig(enabled=True, use_async_queue=False)

        with patch('ranking.tasks.Redis') as mock_redis:
            result = enqueue_ai_ranking(3, config=config, service=service)

        self.assertIsNone(result)
        mock_redis.from_url.assert_not_called()
        service.rank_and_save.assert_called_once_with(3)
        print("  ✓ Processed synchronously")

    @patch('ranking.tasks.Queue')
    @patch('ranking.tasks.Redis')
    def test_sync_mode_when_redis_unreachable(self, mock_redis, mock_queue):
        mock_redis.from_url.return_value.ping.side_effect = ConnectionError("refused")
        service = MagicMock()

        result = enqueue_ai_ranking(3, config=AIRankingConfig(enabled=True), service=service)

        self.assertIsNone(result)
        mock_queue.assert_not_called()
        service.rank_and_save.assert_called_once_with(3)

    @patch('ranking.tasks.Queue')
    @patch('ranking.tasks.Redis')
    def test_enqueues_when_redis_available(self, mock_redis, mock_queue):
        mock_queue.return_value.enqueue.return_value = MagicMock(id="rq-123")
        service = MagicMock()
        config = AIRankingConfig(enabled=True, redis_url="redis://cache:6379/1", queue_name="ranking")

        result = enqueue_ai_ranking(3, config=config, service=service)

        self.assertEqual(result, "rq-123")
        mock_redis.from_url.assert_called_once_with("redis://cache:6379/1")
        mock_queue.assert_called_once_with("ranking", connection=mock_redis.from_url.return_value)
        args, kwargs = mock_queue.return_value.enqueue.call_args
        self.assertEqual(args, (process_ai_ranking_task, 3))
        self.assertEqual(kwargs['job_timeout'], '5m')
        service.rank_and_save.assert_not_called()


class TestRankingTaskCache(unittest.TestCase):
    """Each task builds a fresh service; the Redis cache is what they share."""

    def setUp(self):
        self.sf = make_session_factory()
        self.job_id = seed_job(self.sf)
        self.ann = seed_candidate(self.sf, self.job_id, "Ann Lee", make_fragment(skills=["Python", "AWS"], years=6))
        self.bob = seed_candidate(self.sf, self.job_id, "Bob Ray", make_fragment(skills=["Python"], years=2))
        RescoreOrchestrator(
            scoring_service=ScoringService(),
            session_factory=self.sf,
            controller=RescoreController(),
        ).rescore_job(self.job_id, as_of=date(2024, 6, 1))

        self.provider = MagicMock()
        self.provider.rank_candidates.return_value = {"rankings": [
            {"candidateId": self.bob, "rank": 1, "reason": "Fast learner"},
            {"candidateId": self.ann, "rank": 2, "reason": "Solid"},
        ]}
        self.redis = InMemoryRedis()

    def _fresh_service(self):
        return AIRankingService(
            provider=self.provider,
            config=AIRankingConfig(enabled=True, use_async_queue=False),
            session_factory=self.sf,
        )

    def test_repeat_task_is_served_from_cache(self):
        print("\n📬 UNIT Test: Repeat ranking task hits the cache")
        config = AIRankingConfig(enabled=True, use_async_queue=False)

        with patch('ranking.cache.Redis') as mock_redis_class, \
                patch('ranking.tasks._build_ranking_service', side_effect=self._fresh_service) as mock_build:
            mock_redis_class.from_url.return_value = self.redis
            self.assertIsNone(enqueue_ai_ranking(self.job_id, config=config))
            self.assertIsNone(enqueue_ai_ranking(self.job_id, config=config))

        self.assertEqual(mock_build.call_count, 2)
        self.assertEqual(self.provider.rank_candidates.call_count, 1)
        self.assertEqual(len(self.redis.store), 1)
        print("  ✓ Provider called once for two identical requests")


if __name__ == '__main__':
    unittest.main()
