"""
Celery application configuration.

Redis is both the message broker and result backend. The worker processes
security denials (suspicious-IP checks and critical alerts) off the request
path.
"""

from celery import Celery
from workwise.core.config import settings

celery_app = Celery(
    "workwise_worker",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["workwise.tasks.security_tasks"],
)

celery_app.conf.update(
    # Serialization
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",

    # Timezone
    timezone="UTC",
    enable_utc=True,

    # Task behavior
    task_track_started=True,
    task_time_limit=120,
    task_soft_time_limit=90,

    # Result backend
    result_expires=3600,

    # Worker behavior
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=200,
)
