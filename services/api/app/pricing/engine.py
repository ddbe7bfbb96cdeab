from __future__ import annotations

from packages.shared.schemas import price_list_v1 as prices
from packages.shared.schemas.order_v1 import (
    BrownieCookieSetV1,
    BrownieShapeV1,
    OrderConfigurationV1,
    PriceBreakdownV1,
    SconeSetV1,
)


def _qty(value: int | None, default: int = 0) -> int:
    # Validation already rejects negatives; clamp anything that slipped past it.
    if value is None:
        return default
    return max(0, int(value))


def regular_cookie_count(config: OrderConfigurationV1) -> int:
    return sum(_qty(q) for q in config.regular_cookies.values())


def brownie_set_subtotal(cookie_set: BrownieCookieSetV1) -> int:
    quantity = _qty(cookie_set.quantity, default=1)

    subtotal = quantity * prices.BROWNIE_COOKIE
    if cookie_set.shape == BrownieShapeV1.BIRTHDAY_BEAR:
        subtotal += quantity * prices.BROWNIE_BIRTHDAY_BEAR
    if cookie_set.custom_sticker:
        subtotal += prices.BROWNIE_CUSTOM_STICKER
    if cookie_set.heart_message is not None:
        subtotal += quantity * prices.BROWNIE_HEART_MESSAGE
    return subtotal


def scone_set_subtotal(scone_set: SconeSetV1) -> int:
    quantity = _qty(scone_set.quantity, default=1)

    subtotal = quantity * prices.SCONE
    if scone_set.strawberry_jam:
        subtotal += quantity * prices.SCONE_STRAWBERRY_JAM
    return subtotal


def packaging_subtotal(config: OrderConfigurationV1) -> int:
    if config.packaging is None:
        return 0

    unit_price = prices.PACKAGING[config.packaging]
    if config.packaging in prices.PACKAGING_PER_ITEM:
        # Two-pack and drink sets come boxed already; only loose cookies are wrapped.
        return regular_cookie_count(config) * unit_price
    return unit_price


def compute_price(config: OrderConfigurationV1) -> PriceBreakdownV1:
    """Price an order configuration.

    Every category is present in the result, zero when nothing was ordered from it, and
    ``total`` is the sum of the categories.
    """

    breakdown = PriceBreakdownV1(
        regular_cookies=regular_cookie_count(config) * prices.REGULAR_COOKIE,
        two_pack_set=sum(_qty(s.quantity, default=1) for s in config.two_pack_sets)
        * prices.TWO_PACK_SET,
        single_with_drink=sum(_qty(s.quantity, default=1) for s in config.single_with_drink_sets)
        * prices.SINGLE_WITH_DRINK_SET,
        packaging=packaging_subtotal(config),
        brownie=sum(brownie_set_subtotal(s) for s in config.brownie_cookie_sets),
        scone=sum(scone_set_subtotal(s) for s in config.scone_sets),
        fortune=_qty(config.fortune_cookie) * prices.FORTUNE_COOKIE_BOX,
        airplane=_qty(config.airplane_sandwich) * prices.AIRPLANE_SANDWICH_BOX,
    )
    breakdown.total = (
        breakdown.regular_cookies
        + breakdown.two_pack_set
        + breakdown.single_with_drink
        + breakdown.packaging
        + breakdown.brownie
        + breakdown.scone
        + breakdown.fortune
        + breakdown.airplane
    )
    return breakdown
