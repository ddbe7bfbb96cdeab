from __future__ import annotations

import pytest
from packages.shared.schemas.order_v1 import OrderConfigurationV1


@pytest.fixture()
def full_config() -> OrderConfigurationV1:
    """A configuration touching every product category."""

    return OrderConfigurationV1.model_validate(
        {
            "customerName": "Kim",
            "customerContact": "kim@gmail.com",
            "deliveryDate": "2030-01-02",
            "regularCookies": {"Double Choco": 4, "Lotus": 2},
            "packaging": "single_box",
            "twoPackSets": [{"selectedCookies": ["Lotus", "Double Choco"], "quantity": 2}],
            "singleWithDrinkSets": [
                {"selectedCookie": "Lotus", "selectedDrink": "Milk Tea", "quantity": 12}
            ],
            "brownieCookieSets": [
                {"quantity": 12, "shape": "birthdayBear", "customSticker": True, "heartMessage": "HBD"}
            ],
            "sconeSets": [{"quantity": 12, "flavor": "chocolate", "strawberryJam": True}],
            "fortuneCookie": 1,
            "airplaneSandwich": 1,
        }
    )
