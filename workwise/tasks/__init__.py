"""
Celery tasks package.

- security_tasks: Firestore denial processing (suspicious-IP checks, critical alerts)
"""

from workwise.tasks import security_tasks

__all__ = ["security_tasks"]
