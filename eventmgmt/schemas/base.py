"""
Base Pydantic schemas and the shared field constraints.

Constraints are declared as ``Annotated`` metadata. Every constraint on a
field is evaluated and each failure becomes its own ``FieldError`` with
the exact user-facing message, so a blank name reports both "required"
and the length rule. Errors on different fields are all collected.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, List, Optional, Type, TypeVar

from email_validator import EmailNotValidError
from email_validator import validate_email as check_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from eventmgmt.core.clock import to_naive_utc, utcnow
from eventmgmt.core.exceptions import FieldError, ValidationError

PHONE_PATTERN = r"^[+]?[0-9]{10,15}$"
_PHONE_RE = re.compile(PHONE_PATTERN)

PHONE_MESSAGE = "Phone number should be valid"
EMAIL_MESSAGE = "Email should be valid"

# Error type carrying every failed constraint of one field in ``ctx["messages"]``
CONSTRAINTS_ERROR = "constraints"


@dataclass(frozen=True)
class Constraint:
    """One rule on a field value; ``test`` returns True when the value passes"""
    message: str
    test: Callable[[Any, ValidationInfo], bool]


def required(message: str) -> Constraint:
    """Reject None and blank strings"""
    def test(value, info):
        return value is not None and not (isinstance(value, str) and not value.strip())
    return Constraint(message, test)


def length_between(min_length: int, max_length: int, message: str) -> Constraint:
    def test(value, info):
        return value is None or min_length <= len(value) <= max_length
    return Constraint(message, test)


def at_most(limit: int, label: str) -> Constraint:
    def test(value, info):
        return value is None or len(value) <= limit
    return Constraint(f"{label} must be at most {limit} characters", test)


def at_least(minimum: int, message: str) -> Constraint:
    def test(value, info):
        return value is None or value >= minimum
    return Constraint(message, test)


def valid_phone(message: str = PHONE_MESSAGE) -> Constraint:
    def test(value, info):
        return value is None or _PHONE_RE.fullmatch(value) is not None
    return Constraint(message, test)


def valid_email(message: str = EMAIL_MESSAGE) -> Constraint:
    """Bare address syntax; display-name forms are rejected, empty is left to ``required``"""
    def test(value, info):
        if not value:
            return True
        try:
            check_email(value, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True
    return Constraint(message, test)


def in_future(message: str) -> Constraint:
    """Strictly after the ``now`` passed in the validation context"""
    def test(value, info):
        if value is None:
            return True
        now = (info.context or {}).get("now") or utcnow()
        return to_naive_utc(value) > now
    return Constraint(message, test)


def after_field(other: str, message: str) -> Constraint:
    """Strictly after another, already validated, field of the same payload"""
    def test(value, info):
        earlier = info.data.get(other)
        if value is None or earlier is None:
            return True
        return to_naive_utc(value) > to_naive_utc(earlier)
    return Constraint(message, test)


def naive_utc() -> AfterValidator:
    return AfterValidator(to_naive_utc)


def defaulted() -> Any:
    """Default for a column the model fills on create; an explicit None is still checked"""
    return Field(None, validate_default=False)


class BaseSchema(BaseModel):
    """Base schema with common configuration"""
    model_config = ConfigDict(
        from_attributes=True,
        extra="ignore",
    )

    @field_validator("*")
    @classmethod
    def check_constraints(cls, value, info: ValidationInfo):
        field = cls.model_fields.get(info.field_name)
        if field is None:
            return value
        messages: List[str] = [
            rule.message
            for rule in field.metadata
            if isinstance(rule, Constraint) and not rule.test(value, info)
        ]
        if messages:
            raise PydanticCustomError(CONSTRAINTS_ERROR, "; ".join(messages), {"messages": messages})
        return value


class CreateSchema(BaseSchema):
    """Create payloads validate defaults too, so missing required fields are reported"""
    model_config = ConfigDict(validate_default=True)


class TimestampSchema(BaseSchema):
    """Schema with timestamp fields"""
    created_at: datetime
    updated_at: datetime


class IDSchema(BaseSchema):
    """Schema with ID field"""
    id: int


SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _field_name(loc) -> str:
    return ".".join(str(part) for part in loc) or "__root__"


def _field_errors(err) -> List[FieldError]:
    field = _field_name(err["loc"])
    if err["type"] == CONSTRAINTS_ERROR:
        return [FieldError(field=field, message=m) for m in err["ctx"]["messages"]]
    return [FieldError(field=field, message=err["msg"])]


def validate_payload(schema: Type[SchemaT], payload: Any, *, now: Optional[datetime] = None) -> SchemaT:
    """
    Validate ``payload`` against ``schema`` as of ``now``.

    Raises:
        ValidationError: with one FieldError per violated constraint.
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)

    try:
        return schema.model_validate(payload, context={"now": now or utcnow()})
    except PydanticValidationError as exc:
        raise ValidationError([
            error for err in exc.errors() for error in _field_errors(err)
        ]) from None
