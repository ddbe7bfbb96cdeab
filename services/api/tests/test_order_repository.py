from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest
from packages.shared.schemas.order_v1 import OrderConfigurationV1, OrderStatusV1
from services.api.app.pricing.engine import compute_price
from services.api.app.pricing.items import to_order_items
from services.api.app.services.orders import (
    OrderNotFoundError,
    OrderRepository,
    OrderValidationError,
    configuration_from_order,
    order_items,
    validate_configuration,
)
from sqlalchemy.orm import Session

TODAY = date(2030, 1, 15)
TOMORROW = "2030-01-16"


class _Clock:
    def __init__(self) -> None:
        self._now = datetime(2030, 1, 10, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(minutes=1)
        return self._now


@pytest.fixture()
def db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Session:
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{tmp_path / 'crumb_orders.db'}")
    monkeypatch.setenv("CRUMB_DB_AUTO_CREATE", "true")

    from services.api.app.db.database import db_session
    from services.api.app.db.init_db import init_db

    init_db()
    session = db_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def repo(db: Session) -> OrderRepository:
    return OrderRepository(db, clock=_Clock())


def _create(repo: OrderRepository, config: OrderConfigurationV1, **overrides):
    kwargs = dict(
        customer_name="Kim",
        customer_contact="kim@gmail.com",
        delivery_date=TOMORROW,
        delivery_method="pickup",
        pickup_time=None,
        items=to_order_items(config),
        total_price=compute_price(config).total,
        today=TODAY,
    )
    kwargs.update(overrides)
    return repo.create(**kwargs)


def test_create_persists_pending_order(repo: OrderRepository, full_config) -> None:
    order = _create(repo, full_config)

    assert order.id
    assert order.order_status == OrderStatusV1.PENDING.value
    assert order.payment_confirmed == 0
    assert order.total_price == compute_price(full_config).total
    assert repo.get(order.id).customer_name == "Kim"


def test_same_day_delivery_is_rejected(repo: OrderRepository, full_config) -> None:
    with pytest.raises(OrderValidationError) as exc:
        _create(repo, full_config, delivery_date=TODAY.isoformat())

    assert exc.value.field == "delivery_date"
    assert repo.count() == 0


@pytest.mark.parametrize(
    ("field", "overrides"),
    [
        ("customer_name", {"customer_name": "  "}),
        ("customer_contact", {"customer_contact": ""}),
        ("delivery_date", {"delivery_date": ""}),
        ("delivery_date", {"delivery_date": "next friday"}),
        ("delivery_method", {"delivery_method": "drone"}),
        ("items", {"items": []}),
    ],
)
def test_create_validates_input(
    repo: OrderRepository, full_config, field: str, overrides: dict
) -> None:
    with pytest.raises(OrderValidationError) as exc:
        _create(repo, full_config, **overrides)

    assert exc.value.field == field
    assert repo.count() == 0


def test_get_all_is_newest_first(repo: OrderRepository, full_config) -> None:
    first = _create(repo, full_config, customer_name="First")
    second = _create(repo, full_config, customer_name="Second")

    assert [o.id for o in repo.get_all()] == [second.id, first.id]


def test_get_all_breaks_timestamp_ties_by_id(db: Session, full_config) -> None:
    stamp = datetime(2030, 1, 10, 9, 0, tzinfo=timezone.utc)
    repo = OrderRepository(db, clock=lambda: stamp)
    created = [_create(repo, full_config, customer_name=f"Tie {i}") for i in range(3)]

    expected = sorted((o.id for o in created), reverse=True)
    assert [o.id for o in repo.get_all()] == expected
    assert [o.id for o in repo.get_all()] == expected


def test_unknown_status_is_a_validation_error(repo: OrderRepository, full_config) -> None:
    order = _create(repo, full_config)

    with pytest.raises(OrderValidationError) as exc:
        repo.update_status(order.id, "shipped_to_mars")

    assert exc.value.field == "status"
    assert repo.get(order.id).order_status == OrderStatusV1.PENDING.value


def test_payment_confirmation_drives_status(repo: OrderRepository, full_config) -> None:
    order = _create(repo, full_config)

    confirmed = repo.update_payment(order.id, True)
    assert confirmed.payment_confirmed == 1
    assert confirmed.order_status == OrderStatusV1.PAYMENT_CONFIRMED.value

    repo.update_status(order.id, OrderStatusV1.IN_PRODUCTION)
    withdrawn = repo.update_payment(order.id, False)
    assert withdrawn.payment_confirmed == 0
    assert withdrawn.order_status == OrderStatusV1.PENDING.value


def test_status_updates_are_explicit(repo: OrderRepository, full_config) -> None:
    order = _create(repo, full_config)

    assert repo.update_status(order.id, "in_production").order_status == "in_production"
    assert repo.update_status(order.id, OrderStatusV1.COMPLETED).order_status == "completed"


def test_updates_on_missing_order_raise(repo: OrderRepository) -> None:
    with pytest.raises(OrderNotFoundError):
        repo.update_status("missing", OrderStatusV1.COMPLETED)
    with pytest.raises(OrderNotFoundError):
        repo.update_payment("missing", True)


def test_delete_missing_order_leaves_table_unchanged(repo: OrderRepository, full_config) -> None:
    _create(repo, full_config)

    with pytest.raises(OrderNotFoundError):
        repo.delete("does-not-exist")
    assert repo.count() == 1


def test_delete_removes_order(repo: OrderRepository, full_config) -> None:
    order = _create(repo, full_config)

    repo.delete(order.id)
    assert repo.count() == 0
    with pytest.raises(OrderNotFoundError):
        repo.get(order.id)


def test_stored_items_rebuild_the_original_total(repo: OrderRepository, full_config) -> None:
    order = _create(repo, full_config)

    assert order_items(order) == to_order_items(full_config)
    assert compute_price(configuration_from_order(order)).total == order.total_price


def _submittable(**overrides) -> OrderConfigurationV1:
    data = {
        "customerName": "Kim",
        "customerContact": "kim@gmail.com",
        "deliveryDate": TOMORROW,
        "regularCookies": {"Lotus": 3},
    }
    data.update(overrides)
    return OrderConfigurationV1.model_validate(data)


def test_validate_configuration_accepts_complete_order() -> None:
    validate_configuration(_submittable(), today=TODAY)


@pytest.mark.parametrize(
    ("field", "overrides"),
    [
        ("customer_name", {"customerName": ""}),
        ("customer_contact", {"customerContact": "010-1234-5678"}),
        ("delivery_date", {"deliveryDate": "2030-01-15"}),
        ("delivery_date", {"deliveryDate": "2030-01-14"}),
        ("items", {"regularCookies": {"Lotus": 0}}),
        ("brownie_cookie_sets", {"brownieCookieSets": [{"quantity": 6}]}),
        ("scone_sets", {"sconeSets": [{"quantity": 4, "flavor": "chocolate"}]}),
        (
            "single_with_drink_sets",
            {"singleWithDrinkSets": [{"selectedCookie": "A", "selectedDrink": "B", "quantity": 3}]},
        ),
    ],
)
def test_validate_configuration_rejects(field: str, overrides: dict) -> None:
    with pytest.raises(OrderValidationError) as exc:
        validate_configuration(_submittable(**overrides), today=TODAY)

    assert exc.value.field == field


def test_phone_contact_allowed_without_quote_delivery() -> None:
    validate_configuration(
        _submittable(customerContact="010-1234-5678"), today=TODAY, require_email=False
    )


def test_quick_delivery_without_address_is_only_logged(caplog: pytest.LogCaptureFixture) -> None:
    validate_configuration(_submittable(deliveryMethod="quick"), today=TODAY)

    assert "no delivery address" in caplog.text
