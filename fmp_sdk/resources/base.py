"""Shared plumbing for resource groupings."""

import re
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar, Union

from fmp_sdk.api.client import FMPClient
from fmp_sdk.api.exceptions import FMPValidationError

E = TypeVar("E", bound=Enum)

_SYMBOL_PATTERN = re.compile(r"^[A-Za-z0-9.\-^=]{1,20}$")


class Period(str, Enum):
    """Financial statement period."""

    ANNUAL = "annual"
    QUARTER = "quarter"


def validate_symbol(symbol: str, field: str = "symbol") -> str:
    """
    Check a ticker symbol and return it upper-cased.

    Raises:
        FMPValidationError: If the symbol is empty or malformed
    """
    if not symbol or not symbol.strip():
        raise FMPValidationError("Symbol is required", field=field)

    symbol = symbol.strip().upper()
    if not _SYMBOL_PATTERN.match(symbol):
        raise FMPValidationError(f"Invalid symbol '{symbol}'", field=field)

    return symbol


def validate_date(value: Optional[str], field: str) -> Optional[date]:
    """Parse an optional YYYY-MM-DD date."""
    if value is None:
        return None

    try:
        return date.fromisoformat(value)
    except ValueError:
        raise FMPValidationError(f"Expected YYYY-MM-DD, got '{value}'", field=field) from None


def validate_date_range(from_date: Optional[str], to_date: Optional[str]) -> None:
    start = validate_date(from_date, "from")
    end = validate_date(to_date, "to")

    if start and end and start > end:
        raise FMPValidationError("Start date must not be after end date", field="from")


def validate_choice(enum_cls: Type[E], value: Union[E, str], field: str) -> E:
    """Coerce value into a member of enum_cls."""
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise FMPValidationError(f"Expected one of {choices}, got '{value}'", field=field) from None


def validate_limit(limit: Optional[int], field: str = "limit") -> Optional[int]:
    if limit is not None and limit < 1:
        raise FMPValidationError("Must be a positive integer", field=field)
    return limit


class BaseResource:
    """
    Base class for resource groupings.

    Resources only build query parameters and delegate to
    FMPClient.get(), which owns caching, retries and errors.
    """

    def __init__(self, client: FMPClient) -> None:
        self._client = client

    async def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._client.get(endpoint, params)
