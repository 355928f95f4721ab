"""
Tests for Firestore denial monitoring.

Tests cover:
- Pub/Sub decoding and LogEntry mapping
- Request type and criticality classification
- Suspicious IP detection
- Critical alerts (Slack and log fallback)
- The push endpoint and the Celery task
"""

import base64
import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from workwise.core.config import settings
from workwise.models.security_event import SecurityDenial, SuspiciousIP
from workwise.schemas.security import DenialRecord
from workwise.services import security_monitor
from workwise.services.security_monitor import (
    SecurityEventError,
    build_denial,
    check_suspicious_activity,
    decode_pubsub_message,
    extract_request_type,
    is_critical_denial,
    record_denial,
    send_immediate_alert,
)
from workwise.services.slack_notifier import SlackNotificationError, SlackNotifier


def make_log_entry(method="google.firestore.v1.Firestore.GetDocument",
                   resource="projects/p/databases/(default)/documents/jobs/1",
                   ip="196.25.1.10", email="someone@example.com",
                   timestamp="2026-10-19T08:30:00.123Z"):
    return {
        "timestamp": timestamp,
        "severity": "ERROR",
        "protoPayload": {
            "methodName": method,
            "resourceName": resource,
            "authenticationInfo": {"principalEmail": email} if email else {},
            "requestMetadata": {"callerIp": ip, "callerSuppliedUserAgent": "okhttp/4.9"} if ip else {},
            "status": {"code": 7, "message": "Missing or insufficient permissions."},
        },
    }


def encode(entry):
    return base64.b64encode(json.dumps(entry).encode("utf-8")).decode("ascii")


def push_envelope(entry):
    return {"message": {"data": encode(entry), "messageId": "1"}, "subscription": "projects/p/subscriptions/s"}


def make_denial(**overrides):
    fields = {
        "timestamp": datetime.now(timezone.utc),
        "ip_address": "196.25.1.10",
        "method_name": "google.firestore.v1.Firestore.GetDocument",
        "resource_path": "projects/p/databases/(default)/documents/jobs/1",
        "request_type": "read",
    }
    fields.update(overrides)
    return DenialRecord(**fields)


class FakeNotifier:
    """Stands in for SlackNotifier"""

    def __init__(self, enabled=True, error=None):
        self.enabled = enabled
        self.error = error
        self.sent = []

    async def send_alert(self, denial):
        if self.error:
            raise self.error
        self.sent.append(denial)


class TestDecoding:
    """Tests for Pub/Sub payload decoding"""

    def test_push_envelope(self):
        entry = make_log_entry()

        assert decode_pubsub_message(push_envelope(entry)) == entry

    def test_cloud_event(self):
        entry = make_log_entry()

        assert decode_pubsub_message({"data": {"message": {"data": encode(entry)}}}) == entry

    @pytest.mark.parametrize("payload", [
        {},
        {"message": {}},
        {"message": {"data": "!!! not base64 !!!"}},
        {"message": {"data": base64.b64encode(b"not json").decode()}},
        {"message": {"data": base64.b64encode(b"[1, 2]").decode()}},
    ])
    def test_invalid_payloads(self, payload):
        with pytest.raises(SecurityEventError):
            decode_pubsub_message(payload)


class TestClassification:
    """Tests for request type and criticality"""

    @pytest.mark.parametrize("method, expected", [
        ("google.firestore.v1.Firestore.GetDocument", "read"),
        ("google.firestore.v1.Firestore.ListDocuments", "read"),
        ("google.firestore.v1.Firestore.RunQuery", "read"),
        ("google.firestore.v1.Firestore.BatchGetDocuments", "read"),
        ("google.firestore.v1.Firestore.CreateDocument", "create"),
        ("google.firestore.v1.Firestore.UpdateDocument", "update"),
        ("google.firestore.v1.Firestore.DeleteDocument", "delete"),
        ("google.firestore.v1.Firestore.Listen", "other"),
        (None, "unknown"),
        ("", "unknown"),
    ])
    def test_extract_request_type(self, method, expected):
        assert extract_request_type(method) == expected

    @pytest.mark.parametrize("resource, method, critical", [
        ("documents/jobs/1", "Firestore.GetDocument", False),
        ("documents/admins/uid-1", "Firestore.GetDocument", True),
        ("documents/companies/acme/admins/uid-1", "Firestore.GetDocument", True),
        ("documents/audit_logs/2026", "Firestore.RunQuery", True),
        ("documents/CONFIG/app", "Firestore.GetDocument", True),
        ("documents/jobs/1", "Firestore.DeleteDocument", True),
        (None, None, False),
    ])
    def test_is_critical_denial(self, resource, method, critical):
        denial = make_denial(resource_path=resource, method_name=method)

        assert is_critical_denial(denial) is critical


class TestBuildDenial:
    """Tests for LogEntry to DenialRecord mapping"""

    def test_maps_fields(self):
        denial = build_denial(make_log_entry())

        assert denial.timestamp == datetime(2026, 10, 19, 8, 30, 0, 123000, tzinfo=timezone.utc)
        assert denial.user_id == "someone@example.com"
        assert denial.user_email == "someone@example.com"
        assert denial.ip_address == "196.25.1.10"
        assert denial.user_agent == "okhttp/4.9"
        assert denial.error_code == 7
        assert denial.error_message == "Missing or insufficient permissions."
        assert denial.severity == "ERROR"
        assert denial.request_type == "read"

    def test_anonymous_without_principal(self):
        denial = build_denial(make_log_entry(email=None, ip=None))

        assert denial.user_id == "anonymous"
        assert denial.user_email is None
        assert denial.ip_address is None

    @pytest.mark.parametrize("raw, expected", [
        ("2026-10-19T08:30:00.123456789Z", datetime(2026, 10, 19, 8, 30, 0, 123456, tzinfo=timezone.utc)),
        ("2026-10-19T08:30:00.5Z", datetime(2026, 10, 19, 8, 30, 0, 500000, tzinfo=timezone.utc)),
        ("2026-10-19T10:30:00+02:00", datetime(2026, 10, 19, 8, 30, 0, tzinfo=timezone.utc)),
    ])
    def test_timestamp_precision_and_offsets(self, raw, expected):
        denial = build_denial(make_log_entry(timestamp=raw))

        assert denial.timestamp == expected

    def test_missing_timestamp_uses_now(self):
        entry = make_log_entry()
        del entry["timestamp"]

        denial = build_denial(entry)

        assert datetime.now(timezone.utc) - denial.timestamp < timedelta(minutes=1)


class TestSuspiciousActivity:
    """Tests for the per-IP denial threshold"""

    @pytest.fixture(autouse=True)
    def small_threshold(self, monkeypatch):
        monkeypatch.setattr(settings, "SUSPICIOUS_IP_THRESHOLD", 3)

    def _record(self, db_session, count, **overrides):
        for _ in range(count):
            record_denial(db_session, make_denial(**overrides))

    def test_at_threshold_is_not_flagged(self, db_session):
        self._record(db_session, 3)

        assert check_suspicious_activity(db_session, make_denial()) is None
        assert db_session.query(SuspiciousIP).count() == 0

    def test_over_threshold_is_flagged(self, db_session, caplog):
        self._record(db_session, 4)

        with caplog.at_level(logging.WARNING, logger=settings.SECURITY_LOG_NAME):
            flag = check_suspicious_activity(db_session, make_denial())

        assert flag is not None
        assert flag.ip_address == "196.25.1.10"
        assert flag.denial_count == 4
        assert flag.action_required == "Review IP activity and consider blocking if malicious."

        records = [r for r in caplog.records if r.name == settings.SECURITY_LOG_NAME]
        assert len(records) == 1
        assert records[0].labels["alert_type"] == "suspicious_ip"

    def test_old_denials_are_outside_window(self, db_session):
        old = datetime.now(timezone.utc) - timedelta(minutes=settings.SUSPICIOUS_IP_WINDOW_MINUTES + 5)
        self._record(db_session, 5, timestamp=old)

        assert check_suspicious_activity(db_session, make_denial()) is None

    def test_other_ips_do_not_count(self, db_session):
        self._record(db_session, 5, ip_address="10.0.0.1")

        assert check_suspicious_activity(db_session, make_denial()) is None

    def test_flag_is_refreshed_not_duplicated(self, db_session):
        self._record(db_session, 4)
        check_suspicious_activity(db_session, make_denial())
        self._record(db_session, 1)

        flag = check_suspicious_activity(db_session, make_denial())

        assert db_session.query(SuspiciousIP).count() == 1
        assert flag.denial_count == 5

    def test_no_ip_skips_check(self, db_session):
        assert check_suspicious_activity(db_session, make_denial(ip_address=None)) is None


class TestAlerts:
    """Tests for critical denial alerts"""

    def test_slack_alert_sent(self):
        notifier = FakeNotifier()
        denial = make_denial(resource_path="documents/admins/uid-1")

        assert send_immediate_alert(denial, notifier) is True
        assert notifier.sent == [denial]

    def test_slack_failure_is_logged(self, caplog):
        notifier = FakeNotifier(error=SlackNotificationError("Slack returned 500"))

        with caplog.at_level(logging.ERROR):
            assert send_immediate_alert(make_denial(), notifier) is False

        assert "Slack returned 500" in caplog.text

    def test_log_fallback_without_webhook(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = send_immediate_alert(make_denial(user_email=None), FakeNotifier(enabled=False))

        assert result is False
        assert "CRITICAL ALERT" in caplog.text
        assert "User: Anonymous" in caplog.text

    def test_slack_payload(self):
        notifier = SlackNotifier("https://hooks.slack.com/services/T/B/X")
        payload = notifier.build_payload(make_denial(user_email="x@example.com"))

        fields = {f["title"]: f["value"] for f in payload["attachments"][0]["fields"]}
        assert fields["User"] == "x@example.com"
        assert fields["IP"] == "196.25.1.10"
        assert payload["attachments"][0]["color"] == "danger"

    def test_unconfigured_notifier_raises(self):
        import asyncio

        notifier = SlackNotifier(None)

        assert notifier.enabled is False
        with pytest.raises(SlackNotificationError):
            asyncio.run(notifier.send_alert(make_denial()))


class TestDenialEndpoint:
    """Tests for POST /api/security/firestore-denials"""

    def test_queues_processing(self, client, db_session, monkeypatch):
        queued = []
        monkeypatch.setattr(
            "workwise.api.endpoints.security.queue_task_safely",
            lambda task, *args: queued.append(args) or "task-123",
        )

        response = client.post("/api/security/firestore-denials", json=push_envelope(make_log_entry()))

        assert response.status_code == 202
        data = response.json()
        assert data["request_type"] == "read"
        assert data["critical"] is False
        assert data["queued"] is True
        assert queued == [(data["denial_id"],)]
        assert db_session.query(SecurityDenial).count() == 1

    def test_inline_fallback_alerts_critical(self, client, db_session, monkeypatch):
        alerts = []
        monkeypatch.setattr("workwise.api.endpoints.security.queue_task_safely", lambda task, *args: None)
        monkeypatch.setattr(security_monitor, "send_immediate_alert", lambda denial, notifier=None: alerts.append(denial) or True)

        entry = make_log_entry(
            method="google.firestore.v1.Firestore.DeleteDocument",
            resource="projects/p/databases/(default)/documents/companies/acme/admins/uid-9",
        )
        response = client.post("/api/security/firestore-denials", json={"data": {"message": {"data": encode(entry)}}})

        assert response.status_code == 202
        data = response.json()
        assert data["request_type"] == "delete"
        assert data["critical"] is True
        assert data["queued"] is False
        assert len(alerts) == 1
        assert alerts[0].resource_path.endswith("admins/uid-9")

    def test_bad_payload(self, client, db_session):
        response = client.post("/api/security/firestore-denials", json={"message": {}})

        assert response.status_code == 400

    def test_push_token_required_when_configured(self, client, db_session, monkeypatch):
        monkeypatch.setattr(settings, "SECURITY_PUSH_TOKEN", "s3cret")
        monkeypatch.setattr("workwise.api.endpoints.security.queue_task_safely", lambda task, *args: "task-1")
        body = push_envelope(make_log_entry())

        assert client.post("/api/security/firestore-denials", json=body).status_code == 401
        assert client.post("/api/security/firestore-denials?token=wrong", json=body).status_code == 401
        assert client.post("/api/security/firestore-denials?token=s3cret", json=body).status_code == 202


class TestDenialTask:
    """Tests for the Celery processing task (run eagerly)"""

    def test_task_processes_stored_denial(self, db_session, monkeypatch):
        from conftest import TestingSessionLocal
        from workwise.tasks import security_tasks

        monkeypatch.setattr(security_tasks, "SessionLocal", TestingSessionLocal)
        monkeypatch.setattr(security_monitor, "send_immediate_alert", lambda denial, notifier=None: True)
        row = record_denial(db_session, make_denial(resource_path="documents/config/app"))

        result = security_tasks.process_denial_task.apply(args=(row.id,)).get()

        assert result["status"] == "success"
        assert result["denial_id"] == row.id
        assert result["critical"] is True
        assert result["alerted"] is True
        assert result["suspicious"] is False

    def test_task_unknown_denial(self, db_session, monkeypatch):
        from conftest import TestingSessionLocal
        from workwise.tasks import security_tasks

        monkeypatch.setattr(security_tasks, "SessionLocal", TestingSessionLocal)

        result = security_tasks.process_denial_task.apply(args=(999,)).get()

        assert result == {"status": "error", "message": "Denial not found"}
