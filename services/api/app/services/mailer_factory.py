from __future__ import annotations

import os

from services.api.app.services.mailer_base import MailSender
from services.api.app.services.mailer_mock import MockMailSender


def get_mail_sender() -> MailSender:
    """Select a mail sender based on env vars.

    Defaults to the mock sender so tests and local dev never send real mail unless
    explicitly configured otherwise.
    """

    mode = os.getenv("CRUMB_MAILER", "mock").strip().lower()

    if mode == "mock":
        return MockMailSender()

    if mode == "smtp":
        from services.api.app.services.mailer_smtp import SmtpMailSender

        return SmtpMailSender.from_env()

    raise ValueError(f"Unknown CRUMB_MAILER={mode!r}. Expected mock or smtp.")
