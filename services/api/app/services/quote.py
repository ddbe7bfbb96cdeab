from __future__ import annotations

import csv
import io
from typing import Protocol

from packages.shared.schemas.order_v1 import (
    BrownieItemV1,
    OrderItemV1,
    PackagingV1,
    RegularItemV1,
    SconeItemV1,
    SingleWithDrinkItemV1,
    TwoPackItemV1,
)
from services.api.app.db.models import Order
from services.api.app.pricing.engine import compute_price
from services.api.app.services.orders import configuration_from_order, order_items

PACKAGING_LABELS = {
    PackagingV1.SINGLE_BOX: "Single box",
    PackagingV1.PLASTIC_WRAP: "Plastic wrap",
    PackagingV1.OIL_PAPER: "Oil paper",
}


class QuoteRenderer(Protocol):
    mime_type: str
    extension: str

    def render(self, order: Order) -> bytes: ...


def describe_item(item: OrderItemV1) -> str:
    """One-line summary of the options picked for an item."""

    if isinstance(item, RegularItemV1):
        return ", ".join(f"{name} x{qty}" for name, qty in item.options.cookies.items())
    if isinstance(item, TwoPackItemV1):
        return " + ".join(item.options.selected_cookies)
    if isinstance(item, SingleWithDrinkItemV1):
        return f"{item.options.selected_cookie} + {item.options.selected_drink}"
    if isinstance(item, BrownieItemV1):
        parts = []
        if item.options.shape is not None:
            parts.append(f"shape: {item.options.shape.value}")
        if item.options.custom_sticker:
            parts.append("custom sticker")
        if item.options.heart_message is not None:
            parts.append(f"heart message: {item.options.heart_message!r}")
        if item.options.custom_topper:
            parts.append("custom topper")
        return ", ".join(parts)
    if isinstance(item, SconeItemV1):
        detail = f"flavor: {item.options.flavor.value}"
        if item.options.strawberry_jam:
            detail += ", strawberry jam"
        return detail
    return ""


class CsvQuoteRenderer:
    """Renders an order as a CSV statement that spreadsheet apps open directly."""

    mime_type = "text/csv"
    extension = "csv"

    def render(self, order: Order) -> bytes:
        items = order_items(order)
        packaging_fee = compute_price(configuration_from_order(order)).packaging

        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(["Quote", order.id])
        writer.writerow(["Customer", order.customer_name])
        writer.writerow(["Contact", order.customer_contact])
        writer.writerow(["Delivery date", order.delivery_date])
        writer.writerow(["Delivery method", order.delivery_method])
        writer.writerow([])
        writer.writerow(["Item", "Details", "Quantity", "Unit price", "Amount"])

        for item in items:
            writer.writerow(
                [item.name, describe_item(item), item.quantity, item.price, item.price * item.quantity]
            )

            if isinstance(item, RegularItemV1) and item.options.packaging is not None:
                writer.writerow(
                    [
                        "Packaging",
                        PACKAGING_LABELS[item.options.packaging],
                        "",
                        "",
                        packaging_fee,
                    ]
                )

        writer.writerow([])
        writer.writerow(["Total", "", "", "", order.total_price])

        # BOM so spreadsheet apps detect UTF-8 for non-ASCII names.
        return buf.getvalue().encode("utf-8-sig")


def quote_filename(order: Order, renderer: QuoteRenderer) -> str:
    safe_name = "".join(ch for ch in order.customer_name if ch.isalnum()) or "customer"
    return f"quote_{safe_name}_{order.delivery_date}.{renderer.extension}"
