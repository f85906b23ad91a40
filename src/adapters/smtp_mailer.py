"""SMTP mail adapter.

Sends the plain-text inquiry body to the configured sales mailbox.
"""

from __future__ import annotations

import smtplib
from email.message import EmailMessage
from typing import Optional, Sequence


class SmtpMailer:
    """Mail adapter that delivers notifications through an SMTP server."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        recipients: Sequence[str],
        subject: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 10,
    ) -> None:
        if not recipients:
            raise ValueError("SMTP mailer needs at least one recipient")
        self._host = host
        self._port = port
        self._sender = sender
        self._recipients = list(recipients)
        self._subject = subject
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def build_message(self, body: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = self._subject
        message["From"] = self._sender
        message["To"] = ", ".join(self._recipients)
        message.set_content(body)
        return message

    def send_mail(self, body: str) -> None:
        """Send the notification, wrapping SMTP failures in RuntimeError."""

        message = self.build_message(body)
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
                if self._use_tls:
                    smtp.starttls()
                if self._username:
                    smtp.login(self._username, self._password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise RuntimeError(f"SMTP error via {self._host}:{self._port}: {e}") from e
