"""Ranking Cache - Redis caching for AI ranking results."""
import hashlib
import json
import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional
from urllib.parse import urlparse

from redis import Redis

from ranking.models import AIRankingResult

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL = 'redis://localhost:6379/0'
KEY_PREFIX = 'ai_ranking'

# 1 hour in seconds
CACHE_TTL_SECONDS = 60 * 60


def sanitize_url(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    parsed = urlparse(url)
    if parsed.password:
        return parsed._replace(
            netloc=f"{parsed.username or ''}:*@{parsed.hostname}:{parsed.port or 6379}"
        ).geturl()
    return url


def compute_data_hash(payload: Any) -> str:
    """md5 over the canonical JSON of the ranking inputs."""
    encoded = json.dumps(payload, sort_keys=True, default=str).encode('utf-8')
    return hashlib.md5(encoded).hexdigest()


class RankingCache:
    """
    Caches rankings per (job id, sorted candidate ids) in Redis.

    An entry is served only while its TTL holds and its data hash matches the
    current inputs, so edited requirements or re-extracted profiles miss.
    Entries are shared by every worker and task process. When Redis is
    unreachable the cache is disabled and every lookup misses.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        client: Optional[Redis] = None
    ):
        self.redis_url = redis_url or DEFAULT_REDIS_URL
        self.ttl_seconds = ttl_seconds
        self._redis: Optional[Redis] = client
        self._available = False

        try:
            if self._redis is None:
                self._redis = Redis.from_url(
                    self.redis_url,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5
                )
            self._redis.ping()
            self._available = True
            logger.info(f"Ranking cache connected to Redis at {sanitize_url(self.redis_url)}")
        except Exception as e:
            logger.warning(f"Ranking cache Redis unavailable, caching disabled: {e}")
            self._redis = None

    @property
    def is_available(self) -> bool:
        return self._available and self._redis is not None

    def _make_key(self, job_id: Any, candidate_ids: Iterable[int]) -> str:
        ids = ','.join(str(i) for i in sorted(candidate_ids))
        return f"{KEY_PREFIX}:{job_id}:{ids}"

    def get(self, job_id: Any, candidate_ids: Iterable[int], data_hash: str) -> Optional[List[AIRankingResult]]:
        if not self.is_available:
            return None

        key = self._make_key(job_id, candidate_ids)
        try:
            data = self._redis.get(key)
            if not data:
                logger.debug(f"Ranking cache miss for job {job_id}")
                return None

            entry = json.loads(data)
            if entry.get('data_hash') != data_hash:
                self._redis.delete(key)
                logger.debug(f"Ranking cache entry for job {job_id} is stale")
                return None

            logger.debug(f"Ranking cache hit for job {job_id}")
            return [AIRankingResult.from_dict(r) for r in entry['results']]
        except Exception as e:
            logger.warning(f"Error reading from ranking cache: {e}")
            return None

    def set(
        self,
        job_id: Any,
        candidate_ids: Iterable[int],
        data_hash: str,
        results: List[AIRankingResult],
        ttl_seconds: Optional[int] = None
    ) -> bool:
        if not self.is_available:
            return False

        ttl = ttl_seconds or self.ttl_seconds
        entry = {
            'data_hash': data_hash,
            'results': [r.to_dict() for r in results],
            'cached_at': datetime.now(timezone.utc).isoformat(),
        }
        try:
            self._redis.setex(self._make_key(job_id, candidate_ids), ttl, json.dumps(entry))
            logger.debug(f"Cached AI ranking for job {job_id} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.warning(f"Error writing to ranking cache: {e}")
            return False

    def invalidate(self, job_id: Any = None) -> int:
        """Drop entries for one job, or every ranking entry when job_id is None."""
        if not self.is_available:
            return 0

        pattern = f"{KEY_PREFIX}:*" if job_id is None else f"{KEY_PREFIX}:{job_id}:*"
        deleted = 0
        try:
            cursor = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match=pattern, count=100)
                if keys:
                    self._redis.delete(*keys)
                    deleted += len(keys)
                if cursor == 0:
                    break
        except Exception as e:
            logger.warning(f"Error clearing ranking cache: {e}")
        return deleted
