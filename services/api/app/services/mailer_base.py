from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class MailerError(Exception):
    """Base class for mail delivery errors."""


class MailerNotConfiguredError(MailerError):
    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"SMTP mailer is not configured. Missing env vars: {', '.join(missing)}")
        self.missing = missing


@dataclass(frozen=True, slots=True)
class MailAttachment:
    filename: str
    content: bytes
    mime_type: str = "application/octet-stream"


@dataclass(frozen=True, slots=True)
class OutgoingMail:
    to: str
    subject: str
    html: str
    attachments: list[MailAttachment] = field(default_factory=list)


class MailSender(Protocol):
    name: str

    def send(self, mail: OutgoingMail) -> None: ...
