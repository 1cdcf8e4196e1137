"""
Pydantic validation helpers.
"""

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from issue_tracker.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Location prefixes added by FastAPI that mean nothing to API clients
_TRANSPORT_LOCATIONS = {"body", "query", "path", "header"}


def format_validation_errors(errors: Iterable[Mapping[str, Any]]) -> list[str]:
    """Turn pydantic error dicts into one "field: message" string per error."""
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in _TRANSPORT_LOCATIONS]
        message = str(error.get("msg", "Invalid value"))
        messages.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return messages


def validate_model(model_cls: type[ModelT], data: ModelT | Mapping[str, Any]) -> ModelT:
    """
    Validate ``data`` into ``model_cls``.

    Raises:
        ValidationError: With one message per failing field
    """
    if isinstance(data, model_cls):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError("Validation failed", format_validation_errors(exc.errors())) from exc
