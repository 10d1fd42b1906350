#!/usr/bin/env python3
"""
Unit tests for the Redis-backed RankingCache.
"""

import json
import unittest
from unittest.mock import Mock, patch

from ranking.cache import CACHE_TTL_SECONDS, RankingCache, compute_data_hash
from ranking.models import AIRankingResult
from tests import InMemoryRedis


class TestRankingCache(unittest.TestCase):

    def setUp(self):
        self.redis = InMemoryRedis()
        self.cache = RankingCache(ttl_seconds=60, client=self.redis)
        self.results = [AIRankingResult(1, 1, "a"), AIRankingResult(2, 2, "b")]

    def test_hit_ignores_candidate_order(self):
        self.assertTrue(self.cache.set(5, [2, 1], "h", self.results))
        self.assertEqual(self.cache.get(5, [1, 2], "h"), self.results)
        self.assertIn("ai_ranking:5:1,2", self.redis.store)

    def test_miss_on_other_job_or_candidate_set(self):
        self.cache.set(5, [1, 2], "h", self.results)
        self.assertIsNone(self.cache.get(6, [1, 2], "h"))
        self.assertIsNone(self.cache.get(5, [1, 2, 3], "h"))

    def test_hash_change_misses(self):
        self.cache.set(5, [1, 2], "h", self.results)
        self.assertIsNone(self.cache.get(5, [1, 2], "other"))
        # Stale entry dropped
        self.assertIsNone(self.cache.get(5, [1, 2], "h"))

    def test_ttl_passed_to_setex(self):
        self.cache.set(5, [1, 2], "h", self.results)
        self.cache.set(6, [1, 2], "h", self.results, ttl_seconds=10)
        self.assertEqual(self.redis.ttls["ai_ranking:5:1,2"], 60)
        self.assertEqual(self.redis.ttls["ai_ranking:6:1,2"], 10)
        self.assertEqual(RankingCache(client=InMemoryRedis()).ttl_seconds, CACHE_TTL_SECONDS)

    def test_entry_is_json_with_hash(self):
        self.cache.set(5, [1, 2], "h", self.results)
        entry = json.loads(self.redis.store["ai_ranking:5:1,2"])
        self.assertEqual(entry['data_hash'], "h")
        self.assertEqual(entry['results'][0], {'candidate_id': 1, 'rank': 1, 'reason': "a"})

    def test_returns_fresh_objects(self):
        self.cache.set(5, [1, 2], "h", self.results)
        cached = self.cache.get(5, [1, 2], "h")
        cached[0].rank = 42
        self.assertEqual(self.cache.get(5, [1, 2], "h")[0].rank, 1)

    def test_invalidate(self):
        self.cache.set(5, [1], "h", self.results)
        self.cache.set(6, [1], "h", self.results)
        self.assertEqual(self.cache.invalidate(5), 1)
        self.assertIsNone(self.cache.get(5, [1], "h"))
        self.assertEqual(self.cache.invalidate(), 1)
        self.assertEqual(self.redis.store, {})

    def test_compute_data_hash_is_key_order_independent(self):
        self.assertEqual(compute_data_hash({'a': 1, 'b': [1, 2]}), compute_data_hash({'b': [1, 2], 'a': 1}))
        self.assertNotEqual(compute_data_hash({'a': 1}), compute_data_hash({'a': 2}))


class TestRankingCacheConnection(unittest.TestCase):

    @patch('ranking.cache.Redis')
    def test_connects_with_configured_url(self, mock_redis_class):
        mock_redis_class.from_url.return_value = Mock(ping=Mock(return_value=True))

        cache = RankingCache("redis://cache:6379/2")

        self.assertTrue(cache.is_available)
        args, kwargs = mock_redis_class.from_url.call_args
        self.assertEqual(args, ("redis://cache:6379/2",))
        self.assertTrue(kwargs['decode_responses'])

    @patch('ranking.cache.Redis')
    def test_unreachable_redis_disables_cache(self, mock_redis_class):
        print("\n🗄️ UNIT Test: Redis down")
        mock_redis_class.from_url.return_value.ping.side_effect = ConnectionError("refused")

        cache = RankingCache()

        self.assertFalse(cache.is_available)
        self.assertIsNone(cache.get(5, [1], "h"))
        self.assertFalse(cache.set(5, [1], "h", []))
        self.assertEqual(cache.invalidate(5), 0)
        print("  ✓ Cache disabled, lookups miss")

    def test_read_error_is_a_miss(self):
        client = Mock()
        client.ping.return_value = True
        client.get.side_effect = TimeoutError("slow")
        cache = RankingCache(client=client)

        self.assertIsNone(cache.get(5, [1], "h"))


if __name__ == '__main__':
    unittest.main()
