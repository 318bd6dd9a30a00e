import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from veranstalter.core.config import MAIL_ENABLED, MAIL_HOST, MAIL_PORT, MAIL_FROM, MAIL_TO


class Mailer:
    """Best-effort notification mail; delivery errors are logged, never raised."""

    def __init__(self, enabled: bool, host: str, port: int, sender: str, recipient: str,
                 logger: Optional[logging.Logger] = None):
        self.enabled = enabled
        self.host = host
        self.port = port
        self.sender = sender
        self.recipient = recipient
        self.logger = logger or logging.getLogger(__name__)

    async def send(self, subject: str, body: str) -> None:
        if not self.enabled:
            self.logger.debug("send: mail disabled, subject=%s", subject)
            return
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = self.recipient
        msg.set_content(body, subtype="html")
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (OSError, smtplib.SMTPException) as e:
            self.logger.warning("send: mail to %s failed: %s", self.recipient, e)
            return
        self.logger.debug("send: subject=%s", subject)

    def _deliver(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
            smtp.send_message(msg)


def get_mailer() -> Mailer:
    return Mailer(MAIL_ENABLED, MAIL_HOST, MAIL_PORT, MAIL_FROM, MAIL_TO)
