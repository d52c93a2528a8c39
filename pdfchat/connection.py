"""
Redis + RQ wiring shared by the upload routes and the worker.

Redis = storage for jobs
RQ Queue = the system that manages them

    FastAPI (upload route)
        ➡ enqueues an ingest job
        ➡ Redis keeps the job until a worker picks it up
        ➡ worker runs pdfchat.ingest.process_file
        ➡ result is stored back in Redis (see fetch_job_status)

Connections are created lazily so importing the package never touches the
network.
"""

import logging
from typing import Optional

import redis
from rq import Queue
from rq.exceptions import NoSuchJobError
from rq.job import Job

from pdfchat import config
from pdfchat.ingest import process_file

logger = logging.getLogger(__name__)


def get_redis() -> redis.Redis:
    return redis.Redis.from_url(config.REDIS_URL)


def get_queue(connection: Optional[redis.Redis] = None) -> Queue:
    return Queue(config.QUEUE_NAME, connection=connection or get_redis())


def enqueue_ingest(filename: str, path: Optional[str] = None, url: Optional[str] = None) -> Job:
    """
    📖 Queue an Ingest Job
    ----------------------
    The job payload is {filename, path} for direct uploads or {filename, url}
    for files that were pushed to remote storage first. Exactly one of the
    two locations must be given.
    """
    if (path is None) == (url is None):
        raise ValueError("exactly one of path or url is required")

    job = get_queue().enqueue(
        process_file,
        filename=filename,
        path=path,
        url=url,
        job_timeout=config.JOB_TIMEOUT,
    )
    logger.info("✅ Queued ingest job %s for %s", job.id, filename)
    return job


def fetch_job_status(job_id: str) -> Optional[dict]:
    """Look up a job in Redis; None when it never existed or has expired."""
    try:
        job = Job.fetch(job_id, connection=get_redis())
    except NoSuchJobError:
        return None

    status = job.get_status()
    return {
        "job_id": job.id,
        "status": getattr(status, "value", status),
        "result": job.return_value(),
        "enqueued_at": job.enqueued_at.isoformat() if job.enqueued_at else None,
        "ended_at": job.ended_at.isoformat() if job.ended_at else None,
    }
