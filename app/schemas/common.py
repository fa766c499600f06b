# File: app/schemas/common.py

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, ValidatorFunctionWrapHandler, WrapValidator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.core.errors import FIELD_ERROR


class CamelModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def field_message(message: str, **by_error_type: str) -> WrapValidator:
    """
    Replace pydantic's error for a field with a client-facing message.

    ``by_error_type`` maps pydantic error types to a more specific message,
    e.g. ``less_than_equal="Amount is too large"``.
    """

    def validate(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError as exc:
            kinds = [error["type"] for error in exc.errors()]
            text = next((by_error_type[kind] for kind in kinds if kind in by_error_type), message)
            raise PydanticCustomError(FIELD_ERROR, text)
        except OverflowError:
            raise PydanticCustomError(FIELD_ERROR, message)

    return WrapValidator(validate)


class HealthResponse(CamelModel):
    status: str
    timestamp: str
    version: str
    environment: str
