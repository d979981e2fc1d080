from __future__ import annotations

import logging
from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from ..core.constants import DEFAULT_EMAIL_TIMEOUT_SECONDS
from ..core.exceptions import ConfigurationError
from .model import EmailMessage, SendResult
from .transport import EmailTransport

logger = logging.getLogger(__name__)


class SendGridEmailTransport(EmailTransport):
    """EmailTransport backed by the SendGrid v3 mail API."""

    def __init__(self, api_key: Optional[str], *, timeout: int = DEFAULT_EMAIL_TIMEOUT_SECONDS):
        self._api_key = api_key
        self._timeout = timeout
        self._client: Optional[SendGridAPIClient] = None

    def _get_client(self) -> SendGridAPIClient:
        if not self._api_key:
            raise ConfigurationError("SENDGRID_API_KEY not configured")
        if self._client is None:
            client = SendGridAPIClient(self._api_key)
            client.client.timeout = self._timeout
            self._client = client
        return self._client

    def send(self, message: EmailMessage) -> SendResult:
        mail = Mail(
            from_email=message.from_email,
            to_emails=message.to,
            subject=message.subject,
            html_content=message.html,
        )
        response = self._get_client().send(mail)

        status = int(getattr(response, "status_code", 0) or 0)
        if not 200 <= status < 300:
            logger.warning("SendGrid rejected email to %s (status=%s)", message.to, status)
            return SendResult(error=f"SendGrid responded with status {status}")

        headers = getattr(response, "headers", None) or {}
        return SendResult(message_id=headers.get("X-Message-Id"))
