"""Request dependencies for the side-effect collaborators.

Instances are created once at startup and kept on ``app.state``. Tests swap them out
through ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Request
from services.api.app.services.mailer_base import MailSender
from services.api.app.services.push import PushDispatcher, PushSubscriptionRegistry
from services.api.app.services.quote import CsvQuoteRenderer, QuoteRenderer


def get_mail_sender(request: Request) -> MailSender:
    return request.app.state.mail_sender


def get_push_registry(request: Request) -> PushSubscriptionRegistry:
    return request.app.state.push_registry


def get_push_dispatcher(request: Request) -> PushDispatcher:
    return request.app.state.push_dispatcher


def get_quote_renderer() -> QuoteRenderer:
    return CsvQuoteRenderer()
