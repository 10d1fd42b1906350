#!/usr/bin/env python3
"""
AI Ranking Tasks - queue entry points for the ranking overlay.

enqueue_ai_ranking() pushes process_ai_ranking_task onto the RQ queue when
the async queue is enabled and Redis answers; otherwise the task runs
synchronously in the caller.
"""

import logging
from typing import Any, Optional

from redis import Redis
from rq import Queue, Retry

from core.config_loader import AIRankingConfig, load_config
from ranking.cache import DEFAULT_REDIS_URL

logger = logging.getLogger(__name__)


def _build_ranking_service():
    from core.app_context import AppContext

    ctx = AppContext.build(load_config())
    return ctx.ranking_service


def process_ai_ranking_task(job_id: Any, service=None) -> int:
    """
    Rank and save AI rankings for one job (runs in the RQ worker).

    Returns:
        Number of score rows updated
    """
    service = service or _build_ranking_service()
    if service is None:
        logger.info(f"AI ranking disabled; skipping job {job_id}")
        return 0

    logger.info(f"Processing AI ranking for job {job_id}")
    updated = service.rank_and_save(job_id)
    logger.info(f"AI ranking for job {job_id} updated {updated} scores")
    return updated


def _connect_queue(config: AIRankingConfig) -> Optional[Queue]:
    if not config.use_async_queue:
        logger.info("Async queue disabled via config. Using sync mode.")
        return None
    try:
        redis_conn = Redis.from_url(config.redis_url or DEFAULT_REDIS_URL)
        # Validate connection with ping before using
        redis_conn.ping()
        return Queue(config.queue_name, connection=redis_conn)
    except Exception as e:
        logger.error(f"Redis connection failed: {e}. Falling back to sync mode.")
        return None


def enqueue_ai_ranking(job_id: Any, config: Optional[AIRankingConfig] = None, service=None) -> Optional[str]:
    """
    Queue an AI ranking pass for a job.

    Returns:
        The RQ job id when queued, None when processed synchronously
    """
    config = config or load_config().ai_ranking
    queue = _connect_queue(config)

    if queue is not None:
        job = queue.enqueue(
            process_ai_ranking_task,
            job_id,
            job_timeout='5m',
            result_ttl=86400,
            retry=Retry(max=2, interval=[30, 60])
        )
        logger.info(f"Queued AI ranking for job {job_id} as {job.id}")
        return job.id

    process_ai_ranking_task(job_id, service=service)
    return None
