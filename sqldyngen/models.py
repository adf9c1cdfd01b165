"""Row types for the example schema."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Sequence, TypeVar

_T = TypeVar("_T")


def _to_datetime(value: Any) -> Any:
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


def _to_decimal(value: Any) -> Any:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _values(cls: type, row: Sequence[Any]) -> tuple[Any, ...]:
    values = tuple(row)
    expected = len(fields(cls))
    if len(values) != expected:
        raise ValueError(f"{cls.__name__} expects {expected} columns, got {len(values)}")
    return values


@dataclass
class Order:
    id: int
    user_id: int
    amount: Decimal
    status: str
    created_at: datetime

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> Order:
        """Build from columns id, user_id, amount, status, created_at."""
        id_, user_id, amount, status, created_at = _values(cls, row)
        return cls(id_, user_id, _to_decimal(amount), status, _to_datetime(created_at))


@dataclass
class Product:
    id: int
    name: str | None
    price: Decimal
    stock: int | None
    created_at: datetime

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> Product:
        """Build from columns id, name, price, stock, created_at."""
        id_, name, price, stock, created_at = _values(cls, row)
        return cls(id_, name, _to_decimal(price), stock, _to_datetime(created_at))


@dataclass
class User:
    id: int
    name: str
    email: str
    created_at: datetime
    phone: str | None = None

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> User:
        """Build from columns id, name, email, created_at, phone."""
        id_, name, email, created_at, phone = _values(cls, row)
        return cls(id_, name, email, _to_datetime(created_at), phone)