from __future__ import annotations

from packages.shared.schemas.order_v1 import OrderItemV1, OrderStatusV1, PriceBreakdownV1
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from services.api.app.db.models import Order
from services.api.app.services.messages import MessageKind
from services.api.app.services.orders import order_items


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriceResponse(_ApiModel):
    breakdown: PriceBreakdownV1
    total_price: int


class QuoteResponse(_ApiModel):
    message: str
    order_id: str
    total_price: int


class OrderOut(_ApiModel):
    id: str
    customer_name: str
    customer_contact: str
    delivery_date: str
    delivery_method: str
    pickup_time: str | None = None
    delivery_address: str | None = None
    order_items: list[OrderItemV1]
    total_price: int
    order_status: OrderStatusV1
    payment_confirmed: int
    created_at: str

    @classmethod
    def from_row(cls, order: Order) -> "OrderOut":
        return cls(
            id=order.id,
            customer_name=order.customer_name,
            customer_contact=order.customer_contact,
            delivery_date=order.delivery_date,
            delivery_method=order.delivery_method,
            pickup_time=order.pickup_time,
            delivery_address=order.delivery_address,
            order_items=order_items(order),
            total_price=order.total_price,
            order_status=OrderStatusV1(order.order_status),
            payment_confirmed=order.payment_confirmed,
            created_at=order.created_at.isoformat(),
        )


class OrderStatusUpdate(_ApiModel):
    status: OrderStatusV1


class PaymentUpdate(_ApiModel):
    confirmed: bool


class MessageOut(_ApiModel):
    order_id: str
    kind: MessageKind
    text: str
