"""
Slack incoming-webhook notifier for security alerts.
"""

import logging
from typing import Optional

import httpx

from workwise.schemas.security import DenialRecord

logger = logging.getLogger(__name__)


class SlackNotificationError(Exception):
    """Raised when Slack rejects or cannot receive an alert"""
    pass


class SlackNotifier:
    """Posts formatted denial alerts to a Slack incoming webhook."""

    def __init__(self, webhook_url: Optional[str], timeout: float = 10.0):
        self.webhook_url = webhook_url
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def build_payload(self, denial: DenialRecord) -> dict:
        fields = [
            ("User", denial.user_email or "Anonymous"),
            ("IP", denial.ip_address or "unknown"),
            ("Method", denial.method_name or "unknown"),
            ("Resource", denial.resource_path or "unknown"),
            ("Error", denial.error_message or "unknown"),
            ("Time", denial.timestamp.isoformat()),
        ]
        return {
            "text": ":rotating_light: *Critical Firestore Security Denial*",
            "attachments": [
                {
                    "color": "danger",
                    "fields": [{"title": title, "value": value, "short": title in ("User", "IP")} for title, value in fields],
                    "footer": "Action required: investigate immediately for potential security breach.",
                }
            ],
        }

    async def send_alert(self, denial: DenialRecord) -> None:
        """
        Post an alert for a critical denial.

        Raises:
            SlackNotificationError: If the webhook is unset or the request fails
        """
        if not self.webhook_url:
            raise SlackNotificationError("Slack webhook URL is not configured")

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.webhook_url,
                    json=self.build_payload(denial),
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            raise SlackNotificationError(f"Slack request failed: {e}")

        if response.status_code >= 400:
            raise SlackNotificationError(f"Slack returned {response.status_code}: {response.text}")

        logger.info(f"Slack alert sent for denial from {denial.ip_address}")
