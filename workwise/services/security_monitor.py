"""
Firestore security-denial monitoring.

Cloud Logging routes Firestore permission-denied audit entries to a Pub/Sub
topic whose push subscription posts them to the API. For each entry we:

1. Decode the Pub/Sub message into a LogEntry and extract a DenialRecord
2. Store it (so the per-IP window count includes it)
3. Count recent denials from the same IP and flag the IP past the threshold
4. Alert immediately when the denial touches admin/delete/config paths
"""

import asyncio
import base64
import binascii
import json
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workwise.core.config import settings
from workwise.crud import security as security_crud
from workwise.models.security_event import SecurityDenial, SuspiciousIP
from workwise.schemas.security import DenialRecord
from workwise.services.slack_notifier import SlackNotificationError, SlackNotifier

logger = logging.getLogger(__name__)

# Dedicated log for suspicious IPs, picked up by a log-based alert
security_log = logging.getLogger(settings.SECURITY_LOG_NAME)

CRITICAL_PATTERNS = [
    re.compile(r"admin", re.IGNORECASE),
    re.compile(r"delete", re.IGNORECASE),
    re.compile(r"companies/.*/admins", re.IGNORECASE),
    re.compile(r"audit_logs", re.IGNORECASE),
    re.compile(r"config", re.IGNORECASE),
]

READ_METHODS = ("GetDocument", "ListDocuments", "RunQuery", "BatchGetDocuments")

SUSPICIOUS_IP_ACTION = "Review IP activity and consider blocking if malicious."


class SecurityEventError(Exception):
    """Raised for push payloads that cannot be decoded into a LogEntry"""
    pass


def decode_pubsub_message(envelope: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract the LogEntry from a Pub/Sub push or CloudEvent body.

    Accepts `{"message": {"data": b64}}` (push subscription) and
    `{"data": {"message": {"data": b64}}}` (CloudEvent).

    Raises:
        SecurityEventError: If the body has no message or invalid data
    """
    if not isinstance(envelope, dict):
        raise SecurityEventError("Payload must be a JSON object")

    message = envelope.get("message")
    if message is None and isinstance(envelope.get("data"), dict):
        message = envelope["data"].get("message")

    if not isinstance(message, dict) or not message.get("data"):
        raise SecurityEventError("Missing Pub/Sub message data")

    try:
        raw = base64.b64decode(message["data"], validate=True).decode("utf-8")
        log_entry = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SecurityEventError(f"Invalid Pub/Sub message data: {e}")

    if not isinstance(log_entry, dict):
        raise SecurityEventError("LogEntry must be a JSON object")

    return log_entry


def extract_request_type(method_name: Optional[str]) -> str:
    """Classify a Firestore RPC method name as read/create/update/delete/other."""
    if not method_name:
        return "unknown"

    if any(method in method_name for method in READ_METHODS):
        return "read"
    if "CreateDocument" in method_name:
        return "create"
    if "UpdateDocument" in method_name:
        return "update"
    if "DeleteDocument" in method_name:
        return "delete"

    return "other"


# Cloud Logging sends up to nanosecond precision; datetime keeps microseconds
_FRACTION = re.compile(r"\.(\d+)")


def _parse_timestamp(value: Optional[str]) -> datetime:
    if value:
        text = _FRACTION.sub(
            lambda m: "." + m.group(1)[:6].ljust(6, "0"),
            value.replace("Z", "+00:00"),
            count=1,
        )
        try:
            parsed = datetime.fromisoformat(text)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)
        except ValueError:
            logger.warning(f"Unparseable LogEntry timestamp {value!r}, using receive time")
    return datetime.now(timezone.utc)


def build_denial(log_entry: Dict[str, Any]) -> DenialRecord:
    """Map a Cloud Audit LogEntry onto a DenialRecord."""
    payload = log_entry.get("protoPayload") or {}
    auth_info = payload.get("authenticationInfo") or {}
    request_meta = payload.get("requestMetadata") or {}
    status = payload.get("status") or {}

    principal = auth_info.get("principalEmail")
    method_name = payload.get("methodName")

    return DenialRecord(
        timestamp=_parse_timestamp(log_entry.get("timestamp")),
        user_id=principal or "anonymous",
        user_email=principal,
        ip_address=request_meta.get("callerIp"),
        user_agent=request_meta.get("callerSuppliedUserAgent"),
        method_name=method_name,
        resource_path=payload.get("resourceName"),
        error_code=status.get("code"),
        error_message=status.get("message"),
        severity=log_entry.get("severity"),
        request_type=extract_request_type(method_name),
    )


def is_critical_denial(denial: DenialRecord) -> bool:
    """
    A denial is critical when its resource path or method name mentions
    admin, delete, company admins, audit logs or config.
    """
    for value in (denial.resource_path, denial.method_name):
        if value and any(pattern.search(value) for pattern in CRITICAL_PATTERNS):
            return True
    return False


def record_denial(db: Session, denial: DenialRecord) -> SecurityDenial:
    critical = is_critical_denial(denial)
    row = security_crud.create_denial(db, denial, is_critical=critical)
    logger.info(
        f"Recorded denial {row.id}: {denial.request_type} on {denial.resource_path} "
        f"from {denial.ip_address or 'unknown IP'} (critical={critical})"
    )
    return row


def flag_suspicious_ip(db: Session, ip_address: str, denial_count: int) -> SuspiciousIP:
    security_log.warning(
        f"Suspicious IP detected: {ip_address}. Multiple denials observed.",
        extra={
            "ip_address": ip_address,
            "denial_count": denial_count,
            "action_required": SUSPICIOUS_IP_ACTION,
            "labels": {
                "component": "firestore-security-monitor",
                "alert_type": "suspicious_ip",
            },
        },
    )
    return security_crud.flag_ip(
        db,
        ip_address=ip_address,
        denial_count=denial_count,
        action_required=SUSPICIOUS_IP_ACTION,
        window_minutes=settings.SUSPICIOUS_IP_WINDOW_MINUTES,
    )


def check_suspicious_activity(db: Session, denial: DenialRecord) -> Optional[SuspiciousIP]:
    """
    Flag the denial's IP when it exceeds SUSPICIOUS_IP_THRESHOLD denials
    within SUSPICIOUS_IP_WINDOW_MINUTES.

    Returns:
        The flag when raised, otherwise None. Database errors are logged and
        reported as None so alerting still runs.
    """
    if not denial.ip_address:
        logger.info("No IP address in denial, skipping suspicious activity check.")
        return None

    since = datetime.now(timezone.utc) - timedelta(minutes=settings.SUSPICIOUS_IP_WINDOW_MINUTES)
    try:
        count = security_crud.count_denials_from_ip(db, denial.ip_address, since)
        if count > settings.SUSPICIOUS_IP_THRESHOLD:
            logger.warning(
                f"Suspicious activity: IP {denial.ip_address} has {count} denials "
                f"in the last {settings.SUSPICIOUS_IP_WINDOW_MINUTES} minutes."
            )
            return flag_suspicious_ip(db, denial.ip_address, count)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error checking suspicious activity for {denial.ip_address}: {e}")

    return None


def format_alert_message(denial: DenialRecord) -> str:
    return (
        "Critical Firestore Security Denial\n"
        f"User: {denial.user_email or 'Anonymous'}\n"
        f"IP: {denial.ip_address}\n"
        f"Method: {denial.method_name}\n"
        f"Resource: {denial.resource_path}\n"
        f"Error: {denial.error_message}\n"
        f"Time: {denial.timestamp.isoformat()}\n"
        "Action Required: Investigate immediately for potential security breach."
    )


def send_immediate_alert(denial: DenialRecord, notifier: Optional[SlackNotifier] = None) -> bool:
    """
    Alert on a critical denial via Slack, or the log when Slack is unset.

    Must be called outside a running event loop (Celery worker or sync
    endpoint thread).

    Returns:
        True if Slack accepted the alert
    """
    notifier = notifier or SlackNotifier(settings.SLACK_WEBHOOK_URL)

    if not notifier.enabled:
        logger.warning(
            f"CRITICAL ALERT (Slack webhook not configured, logging instead):\n{format_alert_message(denial)}"
        )
        return False

    try:
        asyncio.run(notifier.send_alert(denial))
        logger.info("Critical denial alert sent to Slack.")
        return True
    except SlackNotificationError as e:
        logger.error(f"Error sending critical denial alert to Slack: {e}")
        return False


def process_denial(db: Session, row: SecurityDenial, notifier: Optional[SlackNotifier] = None) -> Dict[str, Any]:
    """
    Run the suspicious-activity check and critical alert for a stored denial.

    Returns:
        Summary dict (denial_id, suspicious, critical, alerted)
    """
    denial = DenialRecord.model_validate(row)
    flag = check_suspicious_activity(db, denial)

    alerted = False
    if row.is_critical:
        logger.info(f"Critical denial {row.id} detected. Sending immediate alert...")
        alerted = send_immediate_alert(denial, notifier)

    return {
        "denial_id": row.id,
        "suspicious": flag is not None,
        "critical": row.is_critical,
        "alerted": alerted,
    }
