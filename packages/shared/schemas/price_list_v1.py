"""Shared price list (v1).

Unit prices are whole won amounts. The order form preview and the API both price orders
from these values, so a change here changes both at once.
"""

from __future__ import annotations

from packages.shared.schemas.order_v1 import PackagingV1

REGULAR_COOKIE = 4500
TWO_PACK_SET = 10500
SINGLE_WITH_DRINK_SET = 11000

BROWNIE_COOKIE = 7800
BROWNIE_BIRTHDAY_BEAR = 500
BROWNIE_CUSTOM_STICKER = 15000  # per set, not per cookie
BROWNIE_HEART_MESSAGE = 500

SCONE = 6500
SCONE_STRAWBERRY_JAM = 500

FORTUNE_COOKIE_BOX = 17000
AIRPLANE_SANDWICH_BOX = 22000

PACKAGING: dict[PackagingV1, int] = {
    PackagingV1.SINGLE_BOX: 600,
    PackagingV1.PLASTIC_WRAP: 500,
    PackagingV1.OIL_PAPER: 0,
}

# Charged per regular cookie. Everything else in PACKAGING is charged once per order.
PACKAGING_PER_ITEM = frozenset({PackagingV1.SINGLE_BOX, PackagingV1.PLASTIC_WRAP})
