#!/usr/bin/env python3
"""
RQ Worker for the AI ranking overlay.

Consumes the configured ai_ranking queue; every job runs
ranking.tasks.process_ai_ranking_task. Refuses to start when the overlay is
disabled, since queued tasks would only be skipped.

Usage:
    python -m ranking.worker
    python -m ranking.worker --burst
    python -m ranking.worker --config /etc/resumerank/config.yaml --verbose
"""

import sys
import argparse
import logging
from typing import List, Optional

from redis import Redis
from rq import Worker

from core.config_loader import AIRankingConfig, load_config
from ranking.cache import DEFAULT_REDIS_URL, sanitize_url

logger = logging.getLogger(__name__)


def start_worker(config: AIRankingConfig, burst: bool = False) -> int:
    """Run the worker until stopped (or the queue drains in burst mode); returns an exit code."""
    if not config.enabled:
        logger.error("AI ranking is disabled in config (ai_ranking.enabled); worker not started")
        return 1

    redis_url = config.redis_url or DEFAULT_REDIS_URL
    logger.info(
        f"Starting AI ranking worker on queue {config.queue_name!r} "
        f"at {sanitize_url(redis_url)} (burst={burst})"
    )

    try:
        redis_conn = Redis.from_url(redis_url)
        redis_conn.ping()
        Worker([config.queue_name], connection=redis_conn).work(burst=burst)
    except KeyboardInterrupt:
        logger.info("AI ranking worker stopped")
    except Exception as e:
        logger.error(f"AI ranking worker failed: {e}")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='ResumeRank AI ranking worker')
    parser.add_argument('--config', default='config.yaml', help='Path to config.yaml')
    parser.add_argument('--burst', action='store_true', help='Drain the queue and exit')
    parser.add_argument('--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return start_worker(load_config(args.config).ai_ranking, burst=args.burst)


if __name__ == '__main__':
    sys.exit(main())
