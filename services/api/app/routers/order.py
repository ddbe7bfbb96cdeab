from __future__ import annotations

import logging
from typing import NoReturn

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response
from packages.shared.schemas.order_v1 import OrderConfigurationV1
from services.api.app.db.deps import get_order_repository
from services.api.app.deps import (
    get_mail_sender,
    get_push_dispatcher,
    get_push_registry,
    get_quote_renderer,
)
from services.api.app.models.order import (
    MessageOut,
    OrderOut,
    OrderStatusUpdate,
    PaymentUpdate,
    PriceResponse,
    QuoteResponse,
)
from services.api.app.pricing.engine import compute_price
from services.api.app.pricing.items import to_order_items
from services.api.app.services.mailer_base import MailSender
from services.api.app.services.messages import MessageKind, render_message
from services.api.app.services.orders import (
    OrderNotFoundError,
    OrderRepository,
    OrderValidationError,
    validate_configuration,
)
from services.api.app.services.push import (
    PushDispatcher,
    PushSubscriptionRegistry,
    notify_new_order,
)
from services.api.app.services.quote import QuoteRenderer
from services.api.app.services.side_effects import run_side_effect, send_quote_mails

logger = logging.getLogger(__name__)

router = APIRouter()


def _raise_order_http_error(e: Exception) -> NoReturn:
    if isinstance(e, OrderValidationError):
        raise HTTPException(
            status_code=400, detail={"field": e.field, "message": e.message}
        ) from e

    if isinstance(e, OrderNotFoundError):
        raise HTTPException(status_code=404, detail="Order not found") from e

    logger.exception("Unexpected order error", exc_info=e)
    raise HTTPException(status_code=500, detail="Internal Server Error") from e


@router.post("/v1/orders/price", response_model=PriceResponse)
def preview_price(payload: OrderConfigurationV1) -> PriceResponse:
    breakdown = compute_price(payload)
    return PriceResponse(breakdown=breakdown, total_price=breakdown.total)


@router.post("/v1/orders/quote", response_model=QuoteResponse)
def submit_quote(
    payload: OrderConfigurationV1,
    background_tasks: BackgroundTasks,
    repo: OrderRepository = Depends(get_order_repository),
    renderer: QuoteRenderer = Depends(get_quote_renderer),
    mailer: MailSender = Depends(get_mail_sender),
    registry: PushSubscriptionRegistry = Depends(get_push_registry),
    dispatcher: PushDispatcher = Depends(get_push_dispatcher),
) -> QuoteResponse:
    try:
        validate_configuration(payload)
        breakdown = compute_price(payload)
        order = repo.create(
            customer_name=payload.customer_name,
            customer_contact=payload.customer_contact,
            delivery_date=payload.delivery_date,
            delivery_method=payload.delivery_method,
            pickup_time=payload.pickup_time,
            items=to_order_items(payload),
            total_price=breakdown.total,
            delivery_address=payload.delivery_address,
        )
    except Exception as e:
        _raise_order_http_error(e)

    background_tasks.add_task(
        run_side_effect, "quote mail", send_quote_mails, order, renderer, mailer
    )
    background_tasks.add_task(
        run_side_effect,
        "new order push",
        notify_new_order,
        registry,
        dispatcher,
        order.customer_name,
        order.id,
    )

    return QuoteResponse(
        message="Your quote has been sent by email.",
        order_id=order.id,
        total_price=order.total_price,
    )


@router.get("/v1/orders", response_model=list[OrderOut])
def list_orders(repo: OrderRepository = Depends(get_order_repository)) -> list[OrderOut]:
    return [OrderOut.from_row(order) for order in repo.get_all()]


@router.get("/v1/orders/{order_id}", response_model=OrderOut)
def get_order(order_id: str, repo: OrderRepository = Depends(get_order_repository)) -> OrderOut:
    try:
        return OrderOut.from_row(repo.get(order_id))
    except OrderNotFoundError as e:
        _raise_order_http_error(e)


@router.patch("/v1/orders/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    repo: OrderRepository = Depends(get_order_repository),
) -> OrderOut:
    try:
        return OrderOut.from_row(repo.update_status(order_id, payload.status))
    except (OrderNotFoundError, OrderValidationError) as e:
        _raise_order_http_error(e)


@router.patch("/v1/orders/{order_id}/payment", response_model=OrderOut)
def update_order_payment(
    order_id: str,
    payload: PaymentUpdate,
    repo: OrderRepository = Depends(get_order_repository),
) -> OrderOut:
    try:
        return OrderOut.from_row(repo.update_payment(order_id, payload.confirmed))
    except OrderNotFoundError as e:
        _raise_order_http_error(e)


@router.delete("/v1/orders/{order_id}", status_code=204)
def delete_order(order_id: str, repo: OrderRepository = Depends(get_order_repository)) -> Response:
    try:
        repo.delete(order_id)
    except OrderNotFoundError as e:
        _raise_order_http_error(e)
    return Response(status_code=204)


@router.get("/v1/orders/{order_id}/messages/{kind}", response_model=MessageOut)
def get_order_message(
    order_id: str,
    kind: MessageKind,
    repo: OrderRepository = Depends(get_order_repository),
) -> MessageOut:
    try:
        order = repo.get(order_id)
    except OrderNotFoundError as e:
        _raise_order_http_error(e)

    return MessageOut(order_id=order.id, kind=kind, text=render_message(order, kind))
