from __future__ import annotations

import logging
import os
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage

from services.api.app.services.mailer_base import (
    MailerError,
    MailerNotConfiguredError,
    OutgoingMail,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _SmtpConfig:
    host: str
    port: int
    username: str | None
    password: str | None
    sender: str
    use_tls: bool


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "y"}


class SmtpMailSender:
    name = "smtp"

    def __init__(self, config: _SmtpConfig) -> None:
        self._config = config

    @classmethod
    def from_env(cls) -> "SmtpMailSender":
        host = os.getenv("CRUMB_SMTP_HOST", "").strip()
        sender = os.getenv("MAIL_FROM", "").strip()

        missing = [name for name, value in (("CRUMB_SMTP_HOST", host), ("MAIL_FROM", sender)) if not value]
        if missing:
            raise MailerNotConfiguredError(missing)

        return cls(
            _SmtpConfig(
                host=host,
                port=int(os.getenv("CRUMB_SMTP_PORT", "587")),
                username=os.getenv("CRUMB_SMTP_USER") or None,
                password=os.getenv("CRUMB_SMTP_PASSWORD") or None,
                sender=sender,
                use_tls=_parse_bool(os.getenv("CRUMB_SMTP_STARTTLS", "true")),
            )
        )

    def _build_message(self, mail: OutgoingMail) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self._config.sender
        msg["To"] = mail.to
        msg["Subject"] = mail.subject
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(mail.html, subtype="html")

        for attachment in mail.attachments:
            maintype, _, subtype = attachment.mime_type.partition("/")
            msg.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype or "octet-stream",
                filename=attachment.filename,
            )
        return msg

    def send(self, mail: OutgoingMail) -> None:
        msg = self._build_message(mail)
        try:
            with smtplib.SMTP(self._config.host, self._config.port, timeout=30) as smtp:
                if self._config.use_tls:
                    smtp.starttls()
                if self._config.username:
                    smtp.login(self._config.username, self._config.password or "")
                smtp.send_message(msg)
        except (OSError, smtplib.SMTPException) as e:
            raise MailerError(f"SMTP delivery to {mail.to} failed: {e}") from e

        logger.info("Mail sent to=%s subject=%r", mail.to, mail.subject)
