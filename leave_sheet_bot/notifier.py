"""
Slack webhook notifier for audit logs and error reports.

Sends are best effort: failures are logged locally and never raised or
retried, so a broken webhook cannot change a command's result.
"""

import logging

import httpx
from fastapi import BackgroundTasks

logger = logging.getLogger(__name__)

ERROR_PREFIX = "❌ Error Notification:\n"


class WebhookNotifier:
    """Posts ``{"text": ...}`` to a Slack incoming webhook."""

    def __init__(self, webhook_url: str | None, timeout: float = 5.0, client: httpx.Client | None = None):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.client = client

    def send(self, text: str) -> bool:
        """
        Post one message. Returns True if the webhook accepted it.

        Never raises.
        """
        if not text:
            return False

        if not self.webhook_url:
            logger.warning("SLACK_WEBHOOK_URL is not defined; notification dropped")
            return False

        try:
            if self.client is not None:
                response = self.client.post(self.webhook_url, json={"text": text}, timeout=self.timeout)
            else:
                response = httpx.post(self.webhook_url, json={"text": text}, timeout=self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            # InvalidURL is not an HTTPError subclass
            logger.error(f"Error sending message to Slack: {e}")
            return False

        if response.status_code != 200:
            logger.error(f"Slack webhook error: {response.status_code}")
            return False
        return True

    def notify(self, text: str) -> None:
        """Send an audit log message."""
        self.send(text)

    def notify_error(self, text: str) -> None:
        """Send an error report."""
        self.send(f"{ERROR_PREFIX}{text}")


class DeferredNotifier:
    """
    Per-request notifier that sends after the HTTP response.

    Messages are queued as FastAPI background tasks, so the slash command
    answers Slack without waiting on the webhook.
    """

    def __init__(self, notifier: WebhookNotifier, background_tasks: BackgroundTasks):
        self.notifier = notifier
        self.background_tasks = background_tasks

    def notify(self, text: str) -> None:
        self.background_tasks.add_task(self.notifier.notify, text)

    def notify_error(self, text: str) -> None:
        self.background_tasks.add_task(self.notifier.notify_error, text)
