"""
Input parsing helpers shared by use cases.
"""

from enum import Enum
from typing import Type, TypeVar

from src.domain.exceptions.validation_error import (
    InvalidChoiceError,
    RequiredFieldError,
)

E = TypeVar("E", bound=Enum)


def parse_choice(enum_cls: Type[E], value, field_name: str) -> E:
    """Coerce a raw value into an enum member or raise InvalidChoiceError."""
    if value is None or value == "":
        raise RequiredFieldError(field_name)
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        raise InvalidChoiceError(
            field_name, value, [member.value for member in enum_cls]
        ) from e


def require_text(value, field_name: str) -> str:
    """Return a stripped string or raise RequiredFieldError."""
    if value is None or not str(value).strip():
        raise RequiredFieldError(field_name)
    return str(value).strip()
