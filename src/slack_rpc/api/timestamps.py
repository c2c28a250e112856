"""Conversion between datetimes and Slack wire timestamps.

Slack timestamps ("1700000000.123456") double as message identifiers, so the
conversion is done with integer and Decimal arithmetic; floats would lose the
last microsecond digits for current dates.
"""

from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND_MICROS = 1_000_000


def _as_utc(dt: datetime) -> datetime:
    # Naive values are taken to be UTC already
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _micros_since_epoch(dt: datetime) -> int:
    delta = _as_utc(dt) - EPOCH
    return (delta.days * 86_400 + delta.seconds) * _ONE_SECOND_MICROS + delta.microseconds


def to_slack_ts(dt: datetime) -> str:
    """Format a datetime as ``<seconds>.<microseconds>`` since the epoch."""
    micros = _micros_since_epoch(dt)
    # Sign goes on the whole value so "-0.000001" parses back to the same instant
    sign = "-" if micros < 0 else ""
    seconds, fraction = divmod(abs(micros), _ONE_SECOND_MICROS)
    return f"{sign}{seconds}.{fraction:06d}"


def from_slack_ts(value: str) -> datetime:
    """Parse a wire timestamp into an aware UTC datetime.

    Raises ValueError for anything that is not a decimal number.
    """
    try:
        number = Decimal(value.strip())
    except (InvalidOperation, AttributeError) as e:
        raise ValueError(f"Invalid Slack timestamp: {value!r}") from e
    if not number.is_finite():
        raise ValueError(f"Invalid Slack timestamp: {value!r}")

    micros = int((number * _ONE_SECOND_MICROS).to_integral_value())
    return EPOCH + timedelta(microseconds=micros)


def to_epoch_seconds(dt: datetime) -> str:
    """Seconds since the epoch rounded to the nearest whole second, as used by
    ``post_at``. Exact halves round to the even second.
    """
    seconds = Decimal(_micros_since_epoch(dt)).scaleb(-6)
    return str(seconds.quantize(Decimal(1), rounding=ROUND_HALF_EVEN))
