"""Field validation used by the project input form."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class Validatable(BaseModel):
    """A labelled value plus the constraints it must satisfy."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: Union[str, int, float]
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None


class ValidationOutput(BaseModel):
    is_valid: bool
    message: Optional[str] = None


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float))


def _format_bound(bound: float) -> str:
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)


def validate(input: Validatable) -> ValidationOutput:
    """Check ``input`` against its constraints; the first failing rule wins.

    Length bounds only apply to strings and value bounds only to numbers.
    """

    value = input.value

    if input.required and not str(value).strip():
        return ValidationOutput(
            is_valid=False,
            message=f"{input.name} is required but does not have a value.",
        )

    if input.min_length is not None and isinstance(value, str) and len(value) < input.min_length:
        return ValidationOutput(
            is_valid=False,
            message=f"{input.name}'s length is less than its minimum length of {input.min_length}.",
        )

    if input.max_length is not None and isinstance(value, str) and len(value) > input.max_length:
        return ValidationOutput(
            is_valid=False,
            message=f"{input.name}'s length is more than its maximum length of {input.max_length}.",
        )

    if input.min_value is not None and _is_number(value) and value < input.min_value:
        return ValidationOutput(
            is_valid=False,
            message=f"{input.name}'s value is less than its minimum value of {_format_bound(input.min_value)}.",
        )

    if input.max_value is not None and _is_number(value) and value > input.max_value:
        return ValidationOutput(
            is_valid=False,
            message=f"{input.name}'s value is more than its maximum value of {_format_bound(input.max_value)}.",
        )

    return ValidationOutput(is_valid=True)


__all__ = ["Validatable", "ValidationOutput", "validate"]
