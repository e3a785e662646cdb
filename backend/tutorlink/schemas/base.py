"""
Base schemas with standardized field types for consistent API responses.

Wire names are camelCase; Python attributes stay snake_case. Input accepts
either spelling.
"""

from decimal import Decimal
from typing import Any, Generic, List, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import core_schema


class ApiModel(BaseModel):
    """Response DTO base: camelCase aliases, readable from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys (used for socket payloads)."""
        return self.model_dump(by_alias=True, mode="json")


class StrictRequestModel(BaseModel):
    """Request DTO base that always forbids unexpected fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        validate_assignment=True,
    )


class Money(Decimal):
    """Decimal field that always serializes as float"""

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        def validate_money(value: Any) -> Decimal:
            if isinstance(value, Decimal):
                return value
            if isinstance(value, (int, float)):
                return Decimal(str(value))
            if isinstance(value, str):
                return Decimal(value)
            raise ValueError(f"Cannot convert {type(value)} to Money")

        return core_schema.no_info_after_validator_function(
            validate_money,
            core_schema.union_schema(
                [
                    core_schema.int_schema(),
                    core_schema.float_schema(),
                    core_schema.str_schema(),
                    core_schema.is_instance_schema(Decimal),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                float,
                info_arg=False,
                return_schema=core_schema.float_schema(),
            ),
        )


ItemT = TypeVar("ItemT")


class Page(ApiModel, Generic[ItemT]):
    """``{items, page, pageSize, total}`` envelope."""

    items: List[ItemT]
    page: int
    page_size: int
    total: int


def wire_field(attribute: str, wire_name: str, **kwargs: Any) -> Any:
    """
    Field read from ORM ``attribute`` and exposed as ``wire_name``.

    Used where the column name differs from the public name, for example
    ``teacher_id`` exposed as ``teacherUserId``.
    """
    return Field(
        validation_alias=AliasChoices(attribute, wire_name),
        serialization_alias=wire_name,
        **kwargs,
    )
