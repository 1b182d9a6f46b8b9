"""
Shared schema building blocks.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

CENT = Decimal("0.01")


def to_currency(value) -> float:
    """Round a Decimal amount to cents for presentation"""
    return float(Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


# Decimal internally, two-decimal JSON number on the wire
Money = Annotated[
    Decimal, PlainSerializer(to_currency, return_type=float, when_used="json")
]


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )
