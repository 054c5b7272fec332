"""Customer models."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Customer(BaseModel):
    """The single customer matched by an email + ZIP lookup."""

    model_config = ConfigDict(frozen=True)

    customer_id: str
    order_count: int = Field(ge=0)
    orders: List[str] = Field(default_factory=list)
    first_name: str
    last_name: str
    email: str
