from __future__ import annotations

import logging

from services.api.app.services.mailer_base import OutgoingMail

logger = logging.getLogger(__name__)


class MockMailSender:
    """Keeps sent mail in memory instead of delivering it."""

    name = "mock"

    def __init__(self) -> None:
        self.outbox: list[OutgoingMail] = []

    def send(self, mail: OutgoingMail) -> None:
        self.outbox.append(mail)
        logger.info(
            "Mock mail to=%s subject=%r attachments=%d",
            mail.to,
            mail.subject,
            len(mail.attachments),
        )
