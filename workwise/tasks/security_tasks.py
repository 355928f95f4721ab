"""
Celery tasks for Firestore security monitoring.

The push endpoint stores each denial and queues it here, so the per-IP
window count and the Slack alert never hold up the Pub/Sub acknowledgement.
"""

import logging
from workwise.core.celery_app import celery_app
from workwise.core.database import SessionLocal
from workwise.crud import security as security_crud
from workwise.services.security_monitor import process_denial

logger = logging.getLogger(__name__)


@celery_app.task(name="workwise.tasks.security_tasks.process_denial_task", bind=True)
def process_denial_task(self, denial_id: int):
    """
    Run the suspicious-IP check and critical alert for a stored denial.

    Args:
        self: Celery task instance (when bind=True)
        denial_id: SecurityDenial row id

    Returns:
        dict: Processing summary or error details
    """
    logger.info(f"[Task {self.request.id}] Processing denial {denial_id}")

    db = SessionLocal()

    try:
        row = security_crud.get_denial(db, denial_id)
        if not row:
            logger.error(f"[Task {self.request.id}] Denial {denial_id} not found")
            return {"status": "error", "message": "Denial not found"}

        result = process_denial(db, row)
        logger.info(f"[Task {self.request.id}] Denial {denial_id} processed: {result}")
        return {"status": "success", **result}

    except Exception as e:
        logger.error(f"[Task {self.request.id}] Unexpected error processing denial {denial_id}: {e}", exc_info=True)
        return {"status": "error", "error": str(e)}

    finally:
        db.close()
