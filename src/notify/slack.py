"""Slack incoming-webhook notifier."""
from typing import Any, Dict, Optional

import requests

from utils.logger import get_logger
from utils.exceptions import NotificationError

logger = get_logger()


class SlackNotifier:
    """Posts Block Kit payloads to a Slack incoming webhook."""

    def __init__(self, webhook_url: str, timeout: float = 15.0, session: Optional[requests.Session] = None):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def publish(self, payload: Dict[str, Any]) -> None:
        """
        Send one message.

        Raises:
            NotificationError: webhook unreachable or rejected the payload
        """
        try:
            response = self.session.post(self.webhook_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            # str(e) carries the webhook URL, which is a secret
            status = e.response.status_code if e.response is not None else "?"
            body = e.response.text[:200] if e.response is not None else ""
            raise NotificationError(f"Slack rejected the report: HTTP {status} {body}".strip()) from e
        except requests.RequestException as e:
            raise NotificationError(f"Slack webhook unreachable: {type(e).__name__}") from e

        logger.info("Report successfully sent to Slack")

    def close(self) -> None:
        self.session.close()
