"""
📖 RQ Worker for Async PDF Processing
------------------------------------
Consumes ingest jobs from the Redis queue and runs
pdfchat.ingest.process_file for each one.

Usage:
    pdfchat-worker

Or with a custom Redis URL:
    REDIS_URL=redis://localhost:6379/0 pdfchat-worker
"""

import logging
import os
import sys

# macOS + fork(): prevent Objective-C fork safety crash when RQ spawns a work horse
os.environ.setdefault("OBJC_DISABLE_INITIALIZE_FORK_SAFETY", "YES")

import redis
from rq import Worker

from pdfchat import config
from pdfchat.connection import get_queue, get_redis

logger = logging.getLogger(__name__)


def main() -> int:
    config.configure_logging()
    logger.info("🚀 Starting RQ worker (redis=%s, queue=%s)", config.REDIS_URL, config.QUEUE_NAME)

    try:
        redis_conn = get_redis()
        redis_conn.ping()
        logger.info("✅ Redis PING ok")

        queue = get_queue(redis_conn)
        worker = Worker([queue], connection=redis_conn)
        logger.info("👷 Worker started - waiting for jobs...")
        worker.work()
    except KeyboardInterrupt:
        logger.info("👋 Worker stopped by user")
    except redis.ConnectionError as e:
        logger.error("❌ Failed to connect to Redis at %s: %s", config.REDIS_URL, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
