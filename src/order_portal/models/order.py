"""Order and product models produced by the order normalizer."""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_PRODUCT = "Unknown Product"
UNKNOWN_ORDER_TYPE = "Unknown"


class Product(BaseModel):
    """One product line of an order."""

    model_config = ConfigDict(frozen=True)

    name: str = UNKNOWN_PRODUCT
    price: float = Field(default=0.0, ge=0)
    order_type: str = UNKNOWN_ORDER_TYPE
    recurring_date: Optional[str] = None
    next_billing_price: float = Field(default=0.0, ge=0)
    is_trial: bool = False
    is_recurring: bool = False


class Order(BaseModel):
    """Normalized order. ``order_id`` keeps whatever type the API returned."""

    model_config = ConfigDict(frozen=True)

    order_id: Union[int, str]
    date: str = ""
    total: float = Field(default=0.0, ge=0)
    products: List[Product] = Field(default_factory=list)


class SkippedOrder(BaseModel):
    """An order id that could not be fetched or decoded."""

    model_config = ConfigDict(frozen=True)

    order_id: str
    reason: str


class NormalizationResult(BaseModel):
    """Best-effort batch outcome: decoded orders plus the ids left out."""

    model_config = ConfigDict(frozen=True)

    orders: List[Order] = Field(default_factory=list)
    skipped: List[SkippedOrder] = Field(default_factory=list)

    @property
    def skipped_ids(self) -> List[str]:
        return [item.order_id for item in self.skipped]
