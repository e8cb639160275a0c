"""Request schemas, one per endpoint body or query string.

Every handler parses its input through one of these before touching the
database, so bad input never reaches the domain logic.
"""

import re
from datetime import date as date_type
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidInput, validation_message
from .models import CategoryKind
from .money import parse_amount

ISO_DAY = re.compile(r"\d{4}-\d{2}-\d{2}")
ISO_TIME = re.compile(r"\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?$")


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _parse_int(value, field):
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{field} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be an integer") from None


def _parse_month(value):
    month = _parse_int(value, "month")
    if month < 1 or month > 12:
        raise ValueError("month must be between 1 and 12")
    return month


def _parse_year(value):
    year = _parse_int(value, "year")
    # month ranges reach one month either side of the requested one
    if year < 2 or year > 9998:
        raise ValueError("year is out of range")
    return year


class MonthQuery(_Schema):
    year: int
    month: int

    @field_validator("year", mode="before")
    @classmethod
    def check_year(cls, v):
        return _parse_year(v)

    @field_validator("month", mode="before")
    @classmethod
    def check_month(cls, v):
        return _parse_month(v)


class TransactionListQuery(MonthQuery):
    kind: CategoryKind = CategoryKind.EXPENSE

    @field_validator("kind", mode="before")
    @classmethod
    def check_kind(cls, v):
        return CategoryKind.parse(v, CategoryKind.EXPENSE)


class IdQuery(_Schema):
    id: int

    @field_validator("id", mode="before")
    @classmethod
    def check_id(cls, v):
        return _parse_int(v, "id")


class CategoryCreate(_Schema):
    name: str
    parent_id: Optional[int] = Field(default=None, alias="parentId")
    bg_color: Optional[str] = Field(default=None, alias="bgColor")
    children_bg_color: Optional[str] = Field(default=None, alias="childrenBgColor")

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError("name is required")
        return v

    @field_validator("parent_id", mode="before")
    @classmethod
    def check_parent(cls, v):
        v = _blank_to_none(v)
        if v is None:
            return None
        return _parse_int(v, "parentId")

    @field_validator("bg_color", "children_bg_color", mode="before")
    @classmethod
    def check_color(cls, v):
        return _blank_to_none(v)


class CategoryUpdate(_Schema):
    id: int
    name: Optional[str] = None
    bg_color: Optional[str] = Field(default=None, alias="bgColor")
    children_bg_color: Optional[str] = Field(default=None, alias="childrenBgColor")

    @field_validator("id", mode="before")
    @classmethod
    def check_id(cls, v):
        if v is None or v == "":
            raise ValueError("id is required")
        return _parse_int(v, "id")

    @field_validator("name", "bg_color", "children_bg_color", mode="before")
    @classmethod
    def check_optional_text(cls, v):
        return _blank_to_none(v)


class TransactionIn(_Schema):
    date: date_type
    amount: Decimal
    category_id: int = Field(alias="categoryId")
    note: Optional[str] = None
    kind: CategoryKind = CategoryKind.EXPENSE

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, v):
        if not v or not isinstance(v, str):
            raise ValueError("date is required (YYYY-MM-DD)")
        try:
            day, _, time_part = v.strip().partition("T")
            if not ISO_DAY.fullmatch(day) or (time_part and not ISO_TIME.match(time_part)):
                raise ValueError
            return date_type.fromisoformat(day)
        except ValueError:
            raise ValueError("date must be YYYY-MM-DD") from None

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount(cls, v):
        return parse_amount(v)

    @field_validator("category_id", mode="before")
    @classmethod
    def check_category(cls, v):
        if v is None or v == "":
            raise ValueError("categoryId is required")
        return _parse_int(v, "categoryId")

    @field_validator("note", mode="before")
    @classmethod
    def check_note(cls, v):
        return _blank_to_none(v)

    @field_validator("kind", mode="before")
    @classmethod
    def check_kind(cls, v):
        return CategoryKind.parse(v, CategoryKind.EXPENSE)


class TransactionUpdate(TransactionIn):
    id: int

    @field_validator("id", mode="before")
    @classmethod
    def check_id(cls, v):
        if v is None or v == "":
            raise ValueError("id is required")
        return _parse_int(v, "id")


class OpeningBalanceIn(MonthQuery):
    amount: Decimal

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount(cls, v):
        return parse_amount(v)


def parse(schema, data):
    """Validate ``data`` against ``schema`` or raise InvalidInput."""
    if not isinstance(data, dict):
        raise InvalidInput("Invalid JSON body")
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise InvalidInput(validation_message(exc)) from None


def parse_args(schema, args):
    """Validate a query string (a werkzeug MultiDict)."""
    return parse(schema, args.to_dict())
