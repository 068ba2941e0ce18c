"""Email and SMS notification senders."""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from academic_journal.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class EmailMessageSender:
    """Sends notifications through the configured SMTP relay.

    Delivery failures are logged and swallowed.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def _compose(self, message: str, address: str) -> EmailMessage:
        mail = EmailMessage()
        mail["From"] = formataddr((self.settings.SMTP_SENDER_NAME, self.settings.SMTP_SENDER))
        mail["To"] = address
        mail["Subject"] = self.settings.EMAIL_SUBJECT
        mail.set_content(message)
        return mail

    def _deliver(self, mail: EmailMessage) -> None:
        with smtplib.SMTP(
            self.settings.SMTP_HOST,
            self.settings.SMTP_PORT,
            timeout=self.settings.SMTP_TIMEOUT_SECONDS,
        ) as client:
            if self.settings.SMTP_USE_TLS:
                client.starttls()
            if self.settings.SMTP_LOGIN:
                client.login(self.settings.SMTP_LOGIN, self.settings.SMTP_PASSWORD or "")
            client.send_message(mail)

    async def send(self, message: str, address: str | None) -> None:
        if not address:
            logger.warning(f"Skipping email '{message}': recipient has no address")
            return
        if not self.settings.smtp_enabled:
            logger.warning(
                f"Skipping email to '{address}': SMTP relay is not configured",
                extra={"notification_channel": "email"},
            )
            return

        try:
            mail = self._compose(message, address)
            await asyncio.to_thread(self._deliver, mail)
        except Exception:
            logger.warning(
                f"Failed to send '{message}' to '{address}' by email",
                exc_info=True,
                extra={"notification_channel": "email", "address": address},
            )
            return

        logger.info(
            f"Message '{message}' has sent to '{address}' by email",
            extra={"notification_channel": "email", "address": address},
        )


class SmsMessageSender:
    """SMS stub that only records the message in the log."""

    async def send(self, message: str, address: str | None) -> None:
        logger.info(
            f"Message '{message}' has sent to '{address}' by SMS",
            extra={"notification_channel": "sms", "address": address},
        )


class MessageSenderFactory:
    """Creates notification senders for each channel."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def get_email_sender(self) -> EmailMessageSender:
        return EmailMessageSender(self.settings)

    def get_sms_sender(self) -> SmsMessageSender:
        return SmsMessageSender()
