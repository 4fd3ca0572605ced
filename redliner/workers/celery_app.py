import os

from celery import Celery

redis_url = os.getenv("REDIS_URL", "redis://redis:6379/0")

celery_app = Celery(
    "redliner",
    broker=redis_url,
    backend=redis_url,
    include=["redliner.workers.document_tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    beat_schedule={
        "cleanup-expired-documents": {
            "task": "redliner.workers.document_tasks.cleanup_expired_documents",
            "schedule": 60 * 60,  # hourly
        },
    },
)
