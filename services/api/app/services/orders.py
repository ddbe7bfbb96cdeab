"""Order records: submission checks and the order table lifecycle.

Status only changes through explicit admin calls, except for payment confirmation:
confirming payment moves an order to ``payment_confirmed`` and withdrawing it puts the
order back to ``pending``. Concurrent admin edits of the same order are last-write-wins.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from packages.shared.schemas.order_v1 import (
    DeliveryMethodV1,
    OrderConfigurationV1,
    OrderItemV1,
    OrderStatusV1,
    order_items_adapter,
)
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from services.api.app.db.models import Order, utcnow
from services.api.app.pricing.engine import regular_cookie_count
from services.api.app.pricing.items import to_configuration
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

# Applies to the combined quantity across all sets of the product.
MINIMUM_SET_QUANTITY = 12

_email_adapter: TypeAdapter[str] = TypeAdapter(EmailStr)


class OrderError(Exception):
    """Base class for order errors."""


class OrderValidationError(OrderError):
    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class OrderNotFoundError(OrderError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order not found: {order_id}")
        self.order_id = order_id


def local_today() -> date:
    """Today's date at the shop."""

    offset = float(os.getenv("CRUMB_UTC_OFFSET_HOURS", "9"))
    return datetime.now(timezone(timedelta(hours=offset))).date()


def _check_delivery_date(value: str, today: date | None) -> date:
    if not value or not value.strip():
        raise OrderValidationError("delivery_date", "Delivery date is required")

    try:
        delivery = date.fromisoformat(value.strip())
    except ValueError as e:
        raise OrderValidationError("delivery_date", "Delivery date must be YYYY-MM-DD") from e

    if delivery <= (today or local_today()):
        raise OrderValidationError(
            "delivery_date", "Same-day orders are not accepted; pick tomorrow or later"
        )
    return delivery


def has_products(config: OrderConfigurationV1) -> bool:
    return (
        regular_cookie_count(config) > 0
        or bool(config.two_pack_sets)
        or bool(config.single_with_drink_sets)
        or bool(config.brownie_cookie_sets)
        or bool(config.scone_sets)
        or config.fortune_cookie > 0
        or config.airplane_sandwich > 0
    )


def validate_configuration(
    config: OrderConfigurationV1,
    *,
    today: date | None = None,
    require_email: bool = True,
) -> None:
    """Reject a submitted configuration that cannot become an order.

    Raises OrderValidationError naming the first offending field.
    """

    if not config.customer_name.strip():
        raise OrderValidationError("customer_name", "Customer name is required")

    contact = config.customer_contact.strip()
    if not contact:
        raise OrderValidationError("customer_contact", "Contact is required")
    if require_email:
        try:
            _email_adapter.validate_python(contact)
        except PydanticValidationError as e:
            raise OrderValidationError(
                "customer_contact", "An email address is required to send the quote"
            ) from e

    _check_delivery_date(config.delivery_date, today)

    if not has_products(config):
        raise OrderValidationError("items", "Select at least one product")

    minimums = (
        ("single_with_drink_sets", "Cookie + drink sets", config.single_with_drink_sets),
        ("brownie_cookie_sets", "Brownie cookies", config.brownie_cookie_sets),
        ("scone_sets", "Scones", config.scone_sets),
    )
    for field, label, sets in minimums:
        total = sum(s.quantity for s in sets)
        if 0 < total < MINIMUM_SET_QUANTITY:
            raise OrderValidationError(
                field, f"{label} must be ordered in quantities of {MINIMUM_SET_QUANTITY} or more"
            )

    address = (config.delivery_address or "").strip()
    if config.delivery_method == DeliveryMethodV1.QUICK and not address:
        # Accepted for now; the shop confirms the address when it calls the customer.
        logger.warning("Quick delivery order for %r has no delivery address", config.customer_name)


def order_items(order: Order) -> list[OrderItemV1]:
    return order_items_adapter.validate_python(order.order_items_json)


def configuration_from_order(order: Order) -> OrderConfigurationV1:
    return to_configuration(
        order_items(order),
        customer_name=order.customer_name,
        customer_contact=order.customer_contact,
        delivery_date=order.delivery_date,
        delivery_method=DeliveryMethodV1(order.delivery_method),
        pickup_time=order.pickup_time,
        delivery_address=order.delivery_address,
    )


class OrderRepository:
    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow) -> None:
        self._db = db
        self._clock = clock

    def create(
        self,
        customer_name: str,
        customer_contact: str,
        delivery_date: str,
        delivery_method: DeliveryMethodV1 | str,
        pickup_time: str | None,
        items: Sequence[OrderItemV1],
        total_price: int,
        delivery_address: str | None = None,
        today: date | None = None,
    ) -> Order:
        if not customer_name or not customer_name.strip():
            raise OrderValidationError("customer_name", "Customer name is required")
        if not customer_contact or not customer_contact.strip():
            raise OrderValidationError("customer_contact", "Contact is required")
        _check_delivery_date(delivery_date, today)

        try:
            method = DeliveryMethodV1(delivery_method)
        except ValueError as e:
            raise OrderValidationError("delivery_method", "Unknown delivery method") from e

        if not any(item.quantity > 0 for item in items):
            raise OrderValidationError("items", "Select at least one product")
        if total_price < 0:
            raise OrderValidationError("total_price", "Total price cannot be negative")

        order = Order(
            id=uuid4().hex,
            customer_name=customer_name.strip(),
            customer_contact=customer_contact.strip(),
            delivery_date=delivery_date.strip(),
            delivery_method=method.value,
            pickup_time=pickup_time or None,
            delivery_address=delivery_address or None,
            order_items_json=order_items_adapter.dump_python(list(items), mode="json", by_alias=True),
            total_price=total_price,
            order_status=OrderStatusV1.PENDING.value,
            payment_confirmed=0,
            created_at=self._clock(),
        )

        self._db.add(order)
        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        self._db.refresh(order)

        logger.info(
            "Order created id=%s customer=%r total=%d items=%d",
            order.id,
            order.customer_name,
            order.total_price,
            len(items),
        )
        return order

    def get(self, order_id: str) -> Order:
        order = self._db.get(Order, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def get_all(self) -> list[Order]:
        return self._db.query(Order).order_by(Order.created_at.desc(), Order.id.desc()).all()

    def count(self) -> int:
        return self._db.query(Order).count()

    def update_status(self, order_id: str, status: OrderStatusV1 | str) -> Order:
        try:
            new_status = OrderStatusV1(status)
        except ValueError as e:
            raise OrderValidationError("status", f"Unknown order status: {status}") from e

        order = self.get(order_id)
        order.order_status = new_status.value
        self._db.commit()
        self._db.refresh(order)

        logger.info("Order status updated id=%s status=%s", order.id, order.order_status)
        return order

    def update_payment(self, order_id: str, confirmed: bool) -> Order:
        order = self.get(order_id)
        order.payment_confirmed = 1 if confirmed else 0
        order.order_status = (
            OrderStatusV1.PAYMENT_CONFIRMED.value if confirmed else OrderStatusV1.PENDING.value
        )
        self._db.commit()
        self._db.refresh(order)

        logger.info(
            "Order payment updated id=%s confirmed=%s status=%s",
            order.id,
            confirmed,
            order.order_status,
        )
        return order

    def delete(self, order_id: str) -> None:
        order = self.get(order_id)
        self._db.delete(order)
        self._db.commit()

        logger.info("Order deleted id=%s", order_id)
