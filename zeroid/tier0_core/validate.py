"""
zeroid.tier0_core.validate
───────────────────────────
Option validation via Pydantic v2. Raises zeroid ValidationError (not raw
Pydantic errors) so callers only ever handle the package's own taxonomy.
"""
from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from zeroid.tier0_core.errors import ValidationError

T = TypeVar("T", bound=BaseModel)


def validate_input(model: Type[T], data: Any) -> T:
    """
    Validate raw data against a Pydantic model.

    Usage:
        opts = validate_input(GenerateOptions, {"random_length": 10})
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]): err["msg"]
            for err in exc.errors()
        }
        raise ValidationError(
            user_message=f"Invalid {model.__name__}.",
            fields=fields,
        ) from exc


__all__ = ["validate_input"]
