"""Outgoing mail backends.

Both backends expose the same ``send`` call and fail the same way
(``DispatchError``), so handlers never care which provider is configured.
Nothing is retried or queued.
"""

from __future__ import annotations

import logging
import smtplib
from abc import ABC, abstractmethod
from email.errors import MessageError
from email.message import EmailMessage
from typing import Optional

import requests

from globetrekker.core.config import Settings
from globetrekker.core.errors import DispatchError

logger = logging.getLogger(__name__)


class Mailer(ABC):
    @abstractmethod
    def send(self, sender: str, to: str, subject: str, html: str, reply_to: Optional[str] = None) -> None:
        """Hand one HTML mail to the provider or raise ``DispatchError``."""


class SmtpMailer(Mailer):
    """Direct submission over SMTP (Gmail by default)."""

    def __init__(self, host: str, port: int, user: str, password: str, use_tls: bool = True, timeout: int = 10):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(self, sender, to, subject, html, reply_to) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = sender
        msg["To"] = to
        msg["Subject"] = subject
        if reply_to:
            msg["Reply-To"] = reply_to
        msg.set_content("This message requires an HTML-capable mail client.")
        msg.add_alternative(html, subtype="html")
        return msg

    def send(self, sender, to, subject, html, reply_to=None) -> None:
        try:
            # header values with CR/LF or unparsable addresses are rejected here
            msg = self._build_message(sender, to, subject, html, reply_to)
        except (ValueError, MessageError) as e:
            raise DispatchError(f"cannot build mail to {to!r}: {e}") from e

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.user:
                    smtp.login(self.user, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise DispatchError(f"SMTP send to {to} failed: {e}") from e


class ApiMailer(Mailer):
    """Hosted transactional e-mail API (Resend-compatible JSON payload)."""

    def __init__(self, api_url: str, api_key: str, timeout: int = 10):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout

    def send(self, sender, to, subject, html, reply_to=None) -> None:
        payload = {
            "from": sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        if reply_to:
            payload["reply_to"] = reply_to

        try:
            r = requests.post(
                self.api_url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise DispatchError(f"mail API unreachable: {e}") from e

        if r.status_code >= 300:
            raise DispatchError(f"mail API rejected message ({r.status_code}): {r.text[:200]}")


def build_mailer(settings: Settings) -> Mailer:
    if settings.mail_provider == "api":
        logger.info("Using hosted mail API at %s", settings.mail_api_url)
        return ApiMailer(
            api_url=settings.mail_api_url,
            api_key=settings.mail_api_key,
            timeout=settings.mail_timeout_seconds,
        )
    logger.info("Using SMTP mail via %s:%s", settings.smtp_host, settings.smtp_port)
    return SmtpMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        user=settings.email_user,
        password=settings.email_pass,
        use_tls=settings.smtp_use_tls,
        timeout=settings.mail_timeout_seconds,
    )
