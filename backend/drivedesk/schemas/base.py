"""
Shared response building blocks.

Rates, prices and revenue are held as ``Decimal`` internally but leave the
API as JSON numbers; stored instants leave it as UTC.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic_core import core_schema

from ..core.timezone_utils import ensure_utc


class StandardizedModel(BaseModel):
    """Response model readable straight from ORM rows."""

    model_config = ConfigDict(from_attributes=True, use_enum_values=True, populate_by_name=True)


class Money(Decimal):
    """Decimal amount accepted from int, float, str or Decimal; rendered as float."""

    @classmethod
    def _coerce(cls, value: Any) -> Decimal:
        if isinstance(value, Decimal):
            return value
        # str() first so 0.1 stays 0.1 instead of its binary expansion
        return cls(str(value))

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        accepted = core_schema.union_schema(
            [
                core_schema.is_instance_schema(Decimal),
                core_schema.int_schema(),
                core_schema.float_schema(),
                core_schema.str_schema(),
            ]
        )
        return core_schema.no_info_after_validator_function(
            cls._coerce,
            accepted,
            serialization=core_schema.plain_serializer_function_ser_schema(
                float, return_schema=core_schema.float_schema()
            ),
        )


# SQLite hands stored instants back naive; responses always carry UTC.
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
