"""
Shared formatting rules for action responses.

All helpers are total: malformed or missing values fall back to a readable
placeholder instead of raising.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional

WEI_PER_NATIVE = Decimal(10) ** 18
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
DATE_FORMAT = "%Y-%m-%d"
NOT_AVAILABLE = "N/A"


def parse_int(value: Any) -> int:
    """Integer from int/float/decimal string/0x-hex string. Raises ValueError."""
    if isinstance(value, bool):
        raise ValueError(f"Not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except OverflowError as e:
            raise ValueError(f"Not an integer: {value!r}") from e
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return int(text, 16)
        try:
            return int(Decimal(text))
        except (InvalidOperation, OverflowError) as e:
            raise ValueError(f"Not an integer: {value!r}") from e
    raise ValueError(f"Not an integer: {value!r}")


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def truncate_address(value: Optional[str]) -> str:
    """Shorten addresses and hashes to ``first6...last4``."""
    if not value:
        return ""
    if len(value) < 10:
        return value
    return f"{value[:6]}...{value[-4:]}"


def format_count(value: Any) -> str:
    """Thousands-separated number; fractions keep up to 3 decimal places."""
    number = _to_decimal(value)
    if number is None:
        return str(value) if value is not None else NOT_AVAILABLE
    if number == number.to_integral_value():
        return f"{int(number):,}"
    text = f"{number.quantize(Decimal('0.001'), rounding=ROUND_HALF_UP):,f}"
    return text.rstrip("0").rstrip(".")


def format_fixed(value: Any, places: int) -> str:
    number = _to_decimal(value)
    if number is None:
        return NOT_AVAILABLE
    exponent = Decimal(1).scaleb(-places)
    return f"{number.quantize(exponent, rounding=ROUND_HALF_UP):f}"


def format_usd(value: Any) -> str:
    """Fixed 2-decimal USD amount (without the currency sign)."""
    return format_fixed(value, 2)


def format_price(value: Any) -> str:
    """Fixed 5-decimal token price."""
    return format_fixed(value, 5)


def format_amount(value: Any) -> str:
    """Plain decimal rendering without exponent or trailing zeros."""
    number = _to_decimal(value)
    if number is None:
        return str(value) if value is not None else NOT_AVAILABLE
    if number == number.to_integral_value():
        return str(int(number))
    return f"{number.normalize():f}"


def wei_to_native(value: Any) -> str:
    """Raw wei value (decimal or hex string) as native units with 4 decimals."""
    try:
        wei = parse_int(value)
    except ValueError:
        return str(value) if value is not None else NOT_AVAILABLE
    return f"{(Decimal(wei) / WEI_PER_NATIVE).quantize(Decimal('0.0001'), rounding=ROUND_HALF_UP):f}"


def format_timestamp_ms(value: Any, fmt: str = DATETIME_FORMAT) -> str:
    """Millisecond epoch timestamp as a UTC date-time."""
    try:
        millis = parse_int(value)
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).strftime(fmt)
    except (ValueError, OverflowError, OSError):
        return str(value) if value is not None else NOT_AVAILABLE


def format_timestamp(value: Any, fmt: str = DATETIME_FORMAT) -> str:
    """Second epoch timestamp (decimal or hex) as a UTC date-time."""
    try:
        millis = parse_int(value) * 1000
    except ValueError:
        return str(value) if value is not None else NOT_AVAILABLE
    return format_timestamp_ms(millis, fmt)


def format_date(value: Any) -> str:
    """Date from a millisecond epoch value or an ISO-8601 string."""
    if isinstance(value, str) and not value.strip().lstrip("-").isdigit():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return value
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.strftime(DATE_FORMAT)
    return format_timestamp_ms(value, DATE_FORMAT)


def format_sync_status(sync_status: Optional[Mapping[str, Any]], include_last_update: bool = False) -> str:
    """``Sync Status`` line plus an optional ``Last Update`` line; empty when absent."""
    if not sync_status:
        return ""
    text = f"Sync Status: {sync_status.get('status', 'unknown')} (lag: {sync_status.get('lag', 'unknown')})"
    if include_last_update and sync_status.get("timestamp") is not None:
        text += f"\nLast Update: {format_timestamp(sync_status.get('timestamp'))}"
    return text


def same_address(left: Optional[str], right: Optional[str]) -> bool:
    """Case-insensitive address comparison."""
    return bool(left) and bool(right) and left.lower() == right.lower()
