"""Order item normalization.

`to_order_items` flattens a configuration into the billable lines stored with an order.
`to_configuration` goes the other way for stored orders: it rebuilds the configuration
from the item options, so pricing the result gives back the stored total.
"""

from __future__ import annotations

from collections.abc import Iterable

from packages.shared.schemas import price_list_v1 as prices
from packages.shared.schemas.order_v1 import (
    AirplaneItemV1,
    BrownieCookieSetV1,
    BrownieItemV1,
    BrownieOptionsV1,
    DeliveryMethodV1,
    FortuneItemV1,
    OrderConfigurationV1,
    OrderItemV1,
    RegularItemV1,
    RegularOptionsV1,
    SconeItemV1,
    SconeOptionsV1,
    SconeSetV1,
    SingleWithDrinkItemV1,
    SingleWithDrinkOptionsV1,
    SingleWithDrinkSetV1,
    TwoPackItemV1,
    TwoPackOptionsV1,
    TwoPackSetV1,
)
from services.api.app.pricing.engine import (
    brownie_set_subtotal,
    regular_cookie_count,
    scone_set_subtotal,
)

REGULAR_NAME = "Regular Cookies"
FORTUNE_NAME = "Fortune Cookie Box"
AIRPLANE_NAME = "Airplane Sandwich Cookie Box"


def _unit_price(subtotal: int, quantity: int) -> int:
    # Truncates. Stored orders already carry unit prices computed this way.
    if quantity <= 0:
        return 0
    return subtotal // quantity


def to_order_items(config: OrderConfigurationV1) -> list[OrderItemV1]:
    items: list[OrderItemV1] = []

    regular_count = regular_cookie_count(config)
    if regular_count > 0 or config.packaging is not None:
        items.append(
            RegularItemV1(
                name=REGULAR_NAME,
                quantity=regular_count,
                price=prices.REGULAR_COOKIE,
                options=RegularOptionsV1(
                    cookies={k: v for k, v in config.regular_cookies.items() if v > 0},
                    packaging=config.packaging,
                ),
            )
        )

    for i, two_pack in enumerate(config.two_pack_sets, start=1):
        items.append(
            TwoPackItemV1(
                name=f"Two-Pack Set {i}",
                quantity=two_pack.quantity,
                price=prices.TWO_PACK_SET,
                options=TwoPackOptionsV1(selected_cookies=list(two_pack.selected_cookies)),
            )
        )

    for i, drink_set in enumerate(config.single_with_drink_sets, start=1):
        items.append(
            SingleWithDrinkItemV1(
                name=f"Cookie + Drink Set {i}",
                quantity=drink_set.quantity,
                price=prices.SINGLE_WITH_DRINK_SET,
                options=SingleWithDrinkOptionsV1(
                    selected_cookie=drink_set.selected_cookie,
                    selected_drink=drink_set.selected_drink,
                ),
            )
        )

    for i, brownie in enumerate(config.brownie_cookie_sets, start=1):
        items.append(
            BrownieItemV1(
                name=f"Brownie Cookie Set {i}",
                quantity=brownie.quantity,
                price=_unit_price(brownie_set_subtotal(brownie), brownie.quantity),
                options=BrownieOptionsV1(
                    shape=brownie.shape,
                    custom_sticker=brownie.custom_sticker,
                    heart_message=brownie.heart_message,
                    custom_topper=brownie.custom_topper,
                ),
            )
        )

    for i, scone in enumerate(config.scone_sets, start=1):
        items.append(
            SconeItemV1(
                name=f"Scone Set {i}",
                quantity=scone.quantity,
                price=_unit_price(scone_set_subtotal(scone), scone.quantity),
                options=SconeOptionsV1(flavor=scone.flavor, strawberry_jam=scone.strawberry_jam),
            )
        )

    if config.fortune_cookie > 0:
        items.append(
            FortuneItemV1(
                name=FORTUNE_NAME,
                quantity=config.fortune_cookie,
                price=prices.FORTUNE_COOKIE_BOX,
            )
        )

    if config.airplane_sandwich > 0:
        items.append(
            AirplaneItemV1(
                name=AIRPLANE_NAME,
                quantity=config.airplane_sandwich,
                price=prices.AIRPLANE_SANDWICH_BOX,
            )
        )

    return items


def to_configuration(
    items: Iterable[OrderItemV1],
    *,
    customer_name: str = "",
    customer_contact: str = "",
    delivery_date: str = "",
    delivery_method: DeliveryMethodV1 = DeliveryMethodV1.PICKUP,
    pickup_time: str | None = None,
    delivery_address: str | None = None,
) -> OrderConfigurationV1:
    config = OrderConfigurationV1(
        customer_name=customer_name,
        customer_contact=customer_contact,
        delivery_date=delivery_date,
        delivery_method=delivery_method,
        pickup_time=pickup_time,
        delivery_address=delivery_address,
    )

    for item in items:
        if isinstance(item, RegularItemV1):
            for cookie, qty in item.options.cookies.items():
                config.regular_cookies[cookie] = config.regular_cookies.get(cookie, 0) + qty
            if item.options.packaging is not None:
                config.packaging = item.options.packaging
        elif isinstance(item, TwoPackItemV1):
            config.two_pack_sets.append(
                TwoPackSetV1(
                    selected_cookies=item.options.selected_cookies,
                    quantity=item.quantity,
                )
            )
        elif isinstance(item, SingleWithDrinkItemV1):
            config.single_with_drink_sets.append(
                SingleWithDrinkSetV1(
                    selected_cookie=item.options.selected_cookie,
                    selected_drink=item.options.selected_drink,
                    quantity=item.quantity,
                )
            )
        elif isinstance(item, BrownieItemV1):
            config.brownie_cookie_sets.append(
                BrownieCookieSetV1(
                    quantity=item.quantity,
                    shape=item.options.shape,
                    custom_sticker=item.options.custom_sticker,
                    heart_message=item.options.heart_message,
                    custom_topper=item.options.custom_topper,
                )
            )
        elif isinstance(item, SconeItemV1):
            config.scone_sets.append(
                SconeSetV1(
                    quantity=item.quantity,
                    flavor=item.options.flavor,
                    strawberry_jam=item.options.strawberry_jam,
                )
            )
        elif isinstance(item, FortuneItemV1):
            config.fortune_cookie += item.quantity
        elif isinstance(item, AirplaneItemV1):
            config.airplane_sandwich += item.quantity
        else:
            raise TypeError(f"Unknown order item type: {type(item).__name__}")

    return config
