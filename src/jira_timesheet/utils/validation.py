"""Runtime validation helpers shared by every schema in the package.

Schemas are pydantic models (or any type pydantic can build a ``TypeAdapter``
for, such as ``list[TimesheetEntry]``). ``safe_validate`` returns a result
object and never raises; ``validate_data`` converts a failed result into a
``ValidationError`` whose message lists every ``path: message`` pair.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, AnyUrl, BaseModel, EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

T = TypeVar("T")

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


class FieldError(BaseModel):
    """A single failed check: dotted field path plus message."""

    field: str
    message: str


class ValidationError(ValueError):
    """Raised when data does not match its schema."""

    def __init__(self, message: str, errors: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


@dataclass
class ValidationResult(Generic[T]):
    """Outcome of ``safe_validate``: either ``data`` or a list of errors."""

    success: bool
    data: T | None = None
    errors: list[FieldError] = field(default_factory=list)


@lru_cache(maxsize=None)
def _adapter(schema: Any) -> TypeAdapter:
    return TypeAdapter(schema)


def _format_loc(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc)


def safe_validate(schema: Any, data: Any) -> ValidationResult[Any]:
    """Validate ``data`` against ``schema`` without raising.

    Args:
        schema: A pydantic model class, a type expression or a ``TypeAdapter``.
        data: Raw data (usually decoded JSON).

    Returns:
        Validation result with the parsed value or the field errors.
    """
    adapter = schema if isinstance(schema, TypeAdapter) else _adapter(schema)
    try:
        value = adapter.validate_python(data)
    except PydanticValidationError as e:
        errors = [
            FieldError(field=_format_loc(err["loc"]), message=err["msg"]) for err in e.errors()
        ]
        return ValidationResult(success=False, errors=errors)
    return ValidationResult(success=True, data=value)


def validate_data(schema: Any, data: Any, error_message: str | None = None) -> Any:
    """Validate ``data`` against ``schema`` and return the parsed value.

    Args:
        schema: A pydantic model class, a type expression or a ``TypeAdapter``.
        data: Raw data to validate.
        error_message: Optional context prepended to the error details.

    Returns:
        The parsed value.

    Raises:
        ValidationError: If the data does not match the schema.
    """
    result = safe_validate(schema, data)
    if not result.success:
        details = ", ".join(
            f"{err.field}: {err.message}" if err.field else err.message for err in result.errors
        )
        prefix = error_message or "Validation failed"
        raise ValidationError(f"{prefix}: {details}", errors=result.errors)
    return result.data


def is_valid_date_string(date_string: str) -> bool:
    """Check that a string is a real calendar date in ``YYYY-MM-DD`` form."""
    if not isinstance(date_string, str) or not _DATE_PATTERN.fullmatch(date_string):
        return False
    try:
        date.fromisoformat(date_string)
    except ValueError:
        return False
    return True


def is_valid_date_range(start_date: str, end_date: str) -> bool:
    """Check that both dates are valid and ``start_date <= end_date``."""
    if not is_valid_date_string(start_date) or not is_valid_date_string(end_date):
        return False
    return date.fromisoformat(start_date) <= date.fromisoformat(end_date)


def is_valid_email(email: str) -> bool:
    return safe_validate(EmailStr, email).success


def is_valid_url(url: str) -> bool:
    return safe_validate(AnyUrl, url).success


def sanitize_search_text(text: str) -> str:
    """Trim whitespace and strip angle brackets from user search input."""
    return re.sub(r"[<>]", "", text.strip())


def sanitize_file_name(file_name: str) -> str:
    """Reduce a file name to ``[A-Za-z0-9.-]`` with single underscores between runs."""
    name = re.sub(r"[^a-zA-Z0-9.-]", "_", file_name)
    name = re.sub(r"_{2,}", "_", name)
    return re.sub(r"^_|_$", "", name)


def _check_url(value: str) -> str:
    if not is_valid_url(value):
        raise ValueError("Invalid url")
    return value


def _check_date(value: str) -> str:
    if not is_valid_date_string(value):
        raise ValueError("Invalid date, expected YYYY-MM-DD")
    return value


def is_valid_timestamp_string(value: str) -> bool:
    """Check that a string starts with a real ``YYYY-MM-DD`` date.

    Anything after the date must be introduced by ``T`` or a space, as in
    Jira's ``2024-01-15T09:00:00.000+0000``.
    """
    if not isinstance(value, str) or not is_valid_date_string(value[:10]):
        return False
    return len(value) == 10 or value[10] in "T "


def _check_timestamp(value: str) -> str:
    if not is_valid_timestamp_string(value):
        raise ValueError("Invalid timestamp, expected an ISO date or datetime")
    return value


# Field types that validate but keep the input string as is.
UrlStr = Annotated[str, AfterValidator(_check_url)]
DateStr = Annotated[str, AfterValidator(_check_date)]
TimestampStr = Annotated[str, AfterValidator(_check_timestamp)]
