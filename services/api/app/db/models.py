from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String, primary_key=True)

    customer_name: Mapped[str] = mapped_column(String, nullable=False)
    customer_contact: Mapped[str] = mapped_column(String, nullable=False)
    delivery_date: Mapped[str] = mapped_column(String, nullable=False)
    delivery_method: Mapped[str] = mapped_column(String, nullable=False, default="pickup")
    pickup_time: Mapped[str | None] = mapped_column(String, nullable=True)
    delivery_address: Mapped[str | None] = mapped_column(String, nullable=True)

    # Serialized OrderItemV1 list. Never rewritten after creation.
    order_items_json: Mapped[list] = mapped_column(JSON, nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)

    order_status: Mapped[str] = mapped_column(String, nullable=False, default="pending")
    payment_confirmed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
