from __future__ import annotations

import argparse
from datetime import timedelta

from packages.shared.schemas.order_v1 import OrderConfigurationV1, OrderStatusV1
from services.api.app.db.database import db_session
from services.api.app.db.init_db import init_db
from services.api.app.pricing.engine import compute_price
from services.api.app.pricing.items import to_order_items
from services.api.app.services.orders import OrderRepository, local_today

SAMPLE_ORDERS = (
    {
        "customerName": "Sample Pickup",
        "customerContact": "pickup@example.org",
        "regularCookies": {"Double Choco": 6, "Lotus": 6},
        "packaging": "single_box",
    },
    {
        "customerName": "Sample Birthday",
        "customerContact": "birthday@example.org",
        "brownieCookieSets": [
            {"quantity": 12, "shape": "birthdayBear", "customSticker": True, "heartMessage": "HBD"}
        ],
        "fortuneCookie": 1,
    },
    {
        "customerName": "Sample Office",
        "customerContact": "office@example.org",
        "deliveryMethod": "quick",
        "deliveryAddress": "1 Sample Street",
        "singleWithDrinkSets": [
            {"selectedCookie": "Lotus", "selectedDrink": "Cold Brew", "quantity": 20}
        ],
        "sconeSets": [{"quantity": 12, "flavor": "gourmet_butter", "strawberryJam": True}],
    },
)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed sample orders for local dashboard work")
    parser.add_argument("--days-ahead", type=int, default=3, help="Delivery date offset")
    parser.add_argument("--paid", action="store_true", help="Mark the first order as paid")
    args = parser.parse_args()

    init_db()

    delivery_date = (local_today() + timedelta(days=max(1, args.days_ahead))).isoformat()

    db = db_session()
    try:
        repo = OrderRepository(db)
        created = []
        for sample in SAMPLE_ORDERS:
            config = OrderConfigurationV1.model_validate({**sample, "deliveryDate": delivery_date})
            order = repo.create(
                customer_name=config.customer_name,
                customer_contact=config.customer_contact,
                delivery_date=config.delivery_date,
                delivery_method=config.delivery_method,
                pickup_time=config.pickup_time,
                items=to_order_items(config),
                total_price=compute_price(config).total,
                delivery_address=config.delivery_address,
            )
            created.append(order)

        if args.paid and created:
            repo.update_payment(created[0].id, True)
            repo.update_status(created[0].id, OrderStatusV1.IN_PRODUCTION)

        for order in created:
            print(f"{order.id} {order.customer_name} {order.total_price}")
    finally:
        db.close()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
