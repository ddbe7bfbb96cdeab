"""Shared order schema (v1).

The order form and the backend exchange these models. Field names are snake_case in
Python and camelCase on the wire, matching what the order form already sends.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, TypeAdapter
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeliveryMethodV1(str, Enum):
    PICKUP = "pickup"
    QUICK = "quick"


class PackagingV1(str, Enum):
    SINGLE_BOX = "single_box"
    PLASTIC_WRAP = "plastic_wrap"
    OIL_PAPER = "oil_paper"


class BrownieShapeV1(str, Enum):
    BEAR = "bear"
    RABBIT = "rabbit"
    BIRTHDAY_BEAR = "birthdayBear"
    TIGER = "tiger"


class SconeFlavorV1(str, Enum):
    CHOCOLATE = "chocolate"
    GOURMET_BUTTER = "gourmet_butter"


class OrderStatusV1(str, Enum):
    PENDING = "pending"
    PAYMENT_CONFIRMED = "payment_confirmed"
    IN_PRODUCTION = "in_production"
    COMPLETED = "completed"


class BrownieCookieSetV1(_CamelModel):
    quantity: int = Field(1, ge=1)
    shape: BrownieShapeV1 | None = None
    custom_sticker: bool = False
    # Any value other than None enables the message option, including "".
    heart_message: str | None = None
    custom_topper: bool = False


class TwoPackSetV1(_CamelModel):
    selected_cookies: list[str] = Field(..., min_length=2, max_length=2)
    quantity: int = Field(1, ge=1)


class SingleWithDrinkSetV1(_CamelModel):
    selected_cookie: str
    selected_drink: str
    quantity: int = Field(1, ge=1)


class SconeSetV1(_CamelModel):
    quantity: int = Field(1, ge=1)
    flavor: SconeFlavorV1
    strawberry_jam: bool = False


class OrderConfigurationV1(_CamelModel):
    """Everything a customer picks on the order form.

    Customer fields may be blank while the form is being filled in; they are checked
    when the order is submitted, not when it is priced.
    """

    customer_name: str = ""
    customer_contact: str = ""
    customer_phone: str | None = None
    delivery_date: str = ""
    delivery_method: DeliveryMethodV1 = DeliveryMethodV1.PICKUP
    pickup_time: str | None = None
    delivery_address: str | None = None

    regular_cookies: dict[str, NonNegativeInt] = Field(default_factory=dict)
    packaging: PackagingV1 | None = None
    brownie_cookie_sets: list[BrownieCookieSetV1] = Field(default_factory=list)
    two_pack_sets: list[TwoPackSetV1] = Field(default_factory=list)
    single_with_drink_sets: list[SingleWithDrinkSetV1] = Field(default_factory=list)
    scone_sets: list[SconeSetV1] = Field(default_factory=list)
    fortune_cookie: NonNegativeInt = 0  # boxes
    airplane_sandwich: NonNegativeInt = 0  # boxes


class PriceBreakdownV1(_CamelModel):
    regular_cookies: int = 0
    two_pack_set: int = 0
    single_with_drink: int = 0
    packaging: int = 0
    brownie: int = 0
    scone: int = 0
    fortune: int = 0
    airplane: int = 0
    total: int = 0


# Order items. `price` is the unit price; `quantity * price` is the line amount.


class _OrderItemBase(_CamelModel):
    name: str
    quantity: int = Field(..., ge=0)
    price: int = Field(..., ge=0)


class RegularOptionsV1(_CamelModel):
    cookies: dict[str, int] = Field(default_factory=dict)
    packaging: PackagingV1 | None = None


class TwoPackOptionsV1(_CamelModel):
    selected_cookies: list[str]


class SingleWithDrinkOptionsV1(_CamelModel):
    selected_cookie: str
    selected_drink: str


class BrownieOptionsV1(_CamelModel):
    shape: BrownieShapeV1 | None = None
    custom_sticker: bool = False
    heart_message: str | None = None
    custom_topper: bool = False


class SconeOptionsV1(_CamelModel):
    flavor: SconeFlavorV1
    strawberry_jam: bool = False


class RegularItemV1(_OrderItemBase):
    type: Literal["regular"] = "regular"
    options: RegularOptionsV1 = Field(default_factory=RegularOptionsV1)


class TwoPackItemV1(_OrderItemBase):
    type: Literal["twopack"] = "twopack"
    options: TwoPackOptionsV1


class SingleWithDrinkItemV1(_OrderItemBase):
    type: Literal["singledrink"] = "singledrink"
    options: SingleWithDrinkOptionsV1


class BrownieItemV1(_OrderItemBase):
    type: Literal["brownie"] = "brownie"
    options: BrownieOptionsV1 = Field(default_factory=BrownieOptionsV1)


class SconeItemV1(_OrderItemBase):
    type: Literal["scone"] = "scone"
    options: SconeOptionsV1


class FortuneItemV1(_OrderItemBase):
    type: Literal["fortune"] = "fortune"


class AirplaneItemV1(_OrderItemBase):
    type: Literal["airplane"] = "airplane"


OrderItemV1 = Annotated[
    Union[
        RegularItemV1,
        TwoPackItemV1,
        SingleWithDrinkItemV1,
        BrownieItemV1,
        SconeItemV1,
        FortuneItemV1,
        AirplaneItemV1,
    ],
    Field(discriminator="type"),
]

order_items_adapter: TypeAdapter[list[OrderItemV1]] = TypeAdapter(list[OrderItemV1])
