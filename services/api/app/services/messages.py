"""Customer message templates the shop pastes into its chat channel."""

from __future__ import annotations

import os
from enum import Enum

from packages.shared.schemas.order_v1 import BrownieShapeV1, DeliveryMethodV1
from services.api.app.db.models import Order
from services.api.app.pricing.engine import regular_cookie_count
from services.api.app.services.orders import configuration_from_order
from services.api.app.services.quote import PACKAGING_LABELS

PICKUP_HOURS = "2pm - 6pm"

SHAPE_LABELS = {
    BrownieShapeV1.BEAR: "bear",
    BrownieShapeV1.RABBIT: "rabbit",
    BrownieShapeV1.BIRTHDAY_BEAR: "birthday bear",
    BrownieShapeV1.TIGER: "tiger",
}


class MessageKind(str, Enum):
    ORDER_CONFIRM = "order_confirm"
    PAYMENT_CONFIRM = "payment_confirm"
    READY_FOR_PICKUP = "ready_for_pickup"


def _won(amount: int) -> str:
    return f"{amount:,} KRW"


def _order_lines(order: Order) -> list[str]:
    config = configuration_from_order(order)
    lines: list[str] = []

    if regular_cookie_count(config) > 0:
        picked = ", ".join(f"{name} x{qty}" for name, qty in config.regular_cookies.items() if qty > 0)
        lines.append(f"- Regular cookies: {picked}")

    if config.two_pack_sets:
        total = sum(s.quantity for s in config.two_pack_sets)
        lines.append(f"- Two-pack sets: {total}")
        for i, s in enumerate(config.two_pack_sets, start=1):
            lines.append(f"  - Set {i} (x{s.quantity}): {', '.join(s.selected_cookies)}")

    if config.single_with_drink_sets:
        total = sum(s.quantity for s in config.single_with_drink_sets)
        lines.append(f"- Cookie + drink sets: {total}")
        for i, s in enumerate(config.single_with_drink_sets, start=1):
            lines.append(f"  - Set {i} (x{s.quantity}): {s.selected_cookie} + {s.selected_drink}")

    for s in config.brownie_cookie_sets:
        line = f"- Brownie cookies: {s.quantity}"
        if s.shape is not None:
            line += f" ({SHAPE_LABELS[s.shape]})"
        if s.custom_sticker:
            line += " + custom sticker"
        if s.heart_message is not None:
            line += " + heart message"
        if s.custom_topper:
            line += " + custom topper"
        lines.append(line)

    for s in config.scone_sets:
        line = f"- Scones: {s.quantity} ({s.flavor.value.replace('_', ' ')})"
        if s.strawberry_jam:
            line += " + strawberry jam"
        lines.append(line)

    if config.fortune_cookie > 0:
        lines.append(f"- Fortune cookies: {config.fortune_cookie} box(es)")
    if config.airplane_sandwich > 0:
        lines.append(f"- Airplane sandwich cookies: {config.airplane_sandwich} box(es)")

    if config.packaging is not None:
        lines.append(f"- Packaging: {PACKAGING_LABELS[config.packaging]}")

    return lines


def order_confirm_message(order: Order) -> str:
    bank_account = os.getenv("CRUMB_BANK_ACCOUNT", "(bank account to be announced)")
    method = "Pickup" if order.delivery_method == DeliveryMethodV1.PICKUP.value else "Quick delivery"

    return "\n".join(
        [
            f"Hello {order.customer_name}!",
            "",
            "Here is a summary of your order.",
            "",
            *_order_lines(order),
            "",
            f"Total: {_won(order.total_price)}",
            f"{method} date: {order.delivery_date}",
            "",
            f"Bank transfer: {bank_account}",
            "",
            "- Production starts once payment is confirmed.",
            "- Please transfer by the day before your delivery date.",
            "",
            "Thank you!",
        ]
    )


def payment_confirm_message(order: Order) -> str:
    return "\n".join(
        [
            f"Hello {order.customer_name}!",
            "",
            "We have received your payment. Production starts today.",
            "",
            f"Pickup date: {order.delivery_date}",
            f"Pickup hours: {order.pickup_time or PICKUP_HOURS}",
            "",
            "We will send a photo of the finished order on the day.",
        ]
    )


def ready_for_pickup_message(order: Order) -> str:
    return "\n".join(
        [
            f"Hello {order.customer_name}!",
            "",
            "Your order is ready.",
            "",
            f"Pickup hours: {order.pickup_time or PICKUP_HOURS}",
            "Please message us when you are on your way.",
        ]
    )


def render_message(order: Order, kind: MessageKind) -> str:
    if kind == MessageKind.ORDER_CONFIRM:
        return order_confirm_message(order)
    if kind == MessageKind.PAYMENT_CONFIRM:
        return payment_confirm_message(order)
    if kind == MessageKind.READY_FOR_PICKUP:
        return ready_for_pickup_message(order)
    raise ValueError(f"Unknown message kind: {kind!r}")
