"""Work that runs after an order is saved.

None of it may fail the request that created the order: errors are logged and dropped.
"""

from __future__ import annotations

import html
import logging
import os
from collections.abc import Callable
from typing import Any

from services.api.app.db.models import Order
from services.api.app.services.mailer_base import MailAttachment, MailSender, OutgoingMail
from services.api.app.services.quote import QuoteRenderer, quote_filename

logger = logging.getLogger(__name__)


def run_side_effect(name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
    try:
        fn(*args, **kwargs)
    except Exception:
        logger.exception("Side effect %r failed", name)
    else:
        logger.info("Side effect %r done", name)


def owner_email() -> str:
    return os.getenv("CRUMB_OWNER_EMAIL", "owner@crumb.local")


def build_quote_mails(order: Order, renderer: QuoteRenderer) -> list[OutgoingMail]:
    """The customer's quote mail followed by the shop owner's copy."""

    attachment = MailAttachment(
        filename=quote_filename(order, renderer),
        content=renderer.render(order),
        mime_type=renderer.mime_type,
    )

    # Customer input goes into HTML bodies.
    name = html.escape(order.customer_name)
    contact = html.escape(order.customer_contact)
    delivery_date = html.escape(order.delivery_date)

    customer_mail = OutgoingMail(
        to=order.customer_contact,
        subject=f"[Crumb] Quote for {order.customer_name}",
        html=(
            f"<p>Hello {name},</p>"
            "<p>Your quote is attached. This is not a confirmed booking yet; "
            "we will contact you to confirm the details.</p>"
            f"<p><strong>Delivery date:</strong> {delivery_date}</p>"
            "<p>Same-day orders are not accepted.</p>"
        ),
        attachments=[attachment],
    )
    owner_mail = OutgoingMail(
        to=owner_email(),
        subject=f"[New order] {order.customer_name}",
        html=(
            f"<p><strong>Customer:</strong> {name}</p>"
            f"<p><strong>Contact:</strong> {contact}</p>"
            f"<p><strong>Delivery date:</strong> {delivery_date}</p>"
            f"<p><strong>Total:</strong> {order.total_price:,}</p>"
        ),
        attachments=[attachment],
    )
    return [customer_mail, owner_mail]


def send_quote_mails(order: Order, renderer: QuoteRenderer, mailer: MailSender) -> None:
    """Mail the rendered quote to the customer, with a copy to the shop owner.

    Each mail is attempted on its own, so a refused customer address still reaches the owner.
    """

    for mail in build_quote_mails(order, renderer):
        run_side_effect(f"quote mail to {mail.to}", mailer.send, mail)
