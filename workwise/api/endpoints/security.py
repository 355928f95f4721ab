"""
Firestore security-denial push endpoint.

A Pub/Sub push subscription on the audit-log sink posts each permission
denial here. The denial is stored right away and the rest of the work
(suspicious-IP check, critical alert) is queued to Celery, or run inline
when the broker is unreachable so no denial goes unchecked.
"""

import logging
import secrets
from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, HTTPException, Depends, Query, status
from sqlalchemy.orm import Session

from workwise.core.celery_utils import queue_task_safely
from workwise.core.config import settings
from workwise.core.database import get_db
from workwise.schemas.security import DenialIngestResponse
from workwise.services import security_monitor
from workwise.services.security_monitor import SecurityEventError
from workwise.tasks.security_tasks import process_denial_task

router = APIRouter(prefix="/security", tags=["Security"])
logger = logging.getLogger(__name__)


def verify_push_token(token: Optional[str] = Query(None)) -> None:
    """Shared-secret check for the push subscription URL (?token=...)."""
    expected = settings.SECURITY_PUSH_TOKEN
    if expected and not (token and secrets.compare_digest(token, expected)):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid push token")


@router.post(
    "/firestore-denials",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=DenialIngestResponse,
    dependencies=[Depends(verify_push_token)],
)
def receive_firestore_denial(
    envelope: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
):
    """
    Accept one Pub/Sub message carrying a Firestore denial LogEntry.

    Accepts both the push envelope and the CloudEvent shape. Returns 202
    once the denial is stored; `queued` tells whether processing went to a
    worker (True) or ran inline (False).
    """
    try:
        log_entry = security_monitor.decode_pubsub_message(envelope)
    except SecurityEventError as e:
        logger.warning(f"Rejected security push: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    denial = security_monitor.build_denial(log_entry)

    try:
        row = security_monitor.record_denial(db, denial)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to store Firestore denial: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to store denial: {str(e)}")

    task_id = queue_task_safely(process_denial_task, row.id)
    if task_id is None:
        logger.warning(f"Broker unavailable, processing denial {row.id} inline")
        security_monitor.process_denial(db, row)

    return DenialIngestResponse(
        denial_id=row.id,
        request_type=row.request_type,
        critical=row.is_critical,
        queued=task_id is not None,
    )
