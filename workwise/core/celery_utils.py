"""
Celery utility functions for reliable task queueing.

Provides helper functions to ensure Celery tasks are queued successfully
even when called from FastAPI endpoints.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Optional, Tuple
from celery import Task
from kombu import Connection

from workwise.core.config import settings

logger = logging.getLogger(__name__)

# Thread pool for queueing tasks away from uvicorn's event loop
_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="celery_queue")


def _queue_task_sync(task: Task, args: tuple, kwargs: dict) -> Tuple[bool, str, str]:
    """
    Queue a task synchronously in a worker thread.

    Returns:
        Tuple[bool, str, str]: (success, task_id, error_message)
    """
    try:
        # Fresh Kombu connection avoids stale connections in the app's pool
        with Connection(settings.REDIS_URL) as conn:
            result = task.apply_async(
                args=args,
                kwargs=kwargs,
                connection=conn,
                retry=True,
                retry_policy={
                    'max_retries': 3,
                    'interval_start': 0,
                    'interval_step': 0.2,
                    'interval_max': 0.2,
                }
            )
            return (True, result.id, "")
    except Exception as e:
        return (False, "", str(e))


def queue_task_safely(task: Task, *args, **kwargs) -> Optional[str]:
    """
    Queue a Celery task, reporting failure instead of raising.

    Args:
        task: The Celery task to queue
        *args: Positional arguments for the task
        **kwargs: Keyword arguments for the task

    Returns:
        The Celery task id, or None when the broker could not be reached

    Example:
        from workwise.tasks.security_tasks import process_denial_task
        task_id = queue_task_safely(process_denial_task, denial.id)
    """
    future = _executor.submit(_queue_task_sync, task, args, kwargs)
    try:
        success, task_id, error = future.result(timeout=5)
    except FutureTimeoutError:
        success, task_id, error = False, "", "timed out waiting for broker"

    if success:
        logger.info(f"Task {task.name} queued successfully: {task_id}")
        return task_id

    logger.error(f"Failed to queue task {task.name}: {error}")
    return None
