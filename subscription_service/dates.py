"""
Input normalisation helpers shared by every store operation.

Dates travel over the wire as ``MM-YYYY`` and are stored as the first day
of that month at midnight (naive timestamp).
"""
import re
import uuid
from datetime import datetime

from subscription_service.exceptions import ValidationError

_MONTH_YEAR_RE = re.compile(r"^(0[1-9]|1[0-2])-([0-9]{4})$")
_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def parse_month_year(value: str | None, field: str) -> datetime:
    """
    Parse a required ``MM-YYYY`` string into the first day of that month.

    Raises ``ValidationError`` when *value* is missing/empty or does not
    match the pattern.
    """
    if value is None or value == "":
        raise ValidationError(f"{field} is required")
    match = _MONTH_YEAR_RE.fullmatch(value)
    if match is None:
        raise ValidationError(f"invalid {field} format, expected MM-YYYY")
    month, year = int(match.group(1)), int(match.group(2))
    if year < 1:
        raise ValidationError(f"invalid {field} format, expected MM-YYYY")
    return datetime(year, month, 1)


def parse_optional_month_year(value: str | None, field: str) -> datetime | None:
    """Like ``parse_month_year`` but an empty or missing value means no date."""
    if value is None or value == "":
        return None
    return parse_month_year(value, field)


def to_first_day_of_month(value: datetime) -> datetime:
    return value.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def format_month_year(value: datetime) -> str:
    # strftime pads %Y inconsistently across platforms for years < 1000.
    value = to_first_day_of_month(value)
    return f"{value.month:02d}-{value.year:04d}"


def parse_user_id(value: str | uuid.UUID) -> uuid.UUID:
    """Return *value* as a UUID, raising ``ValidationError`` on bad syntax."""
    if isinstance(value, uuid.UUID):
        return value
    # Only the hyphenated 8-4-4-4-12 form is accepted, not braces or urn: prefixes.
    if not isinstance(value, str) or _UUID_RE.fullmatch(value) is None:
        raise ValidationError("invalid user_id, expected UUID")
    return uuid.UUID(value)
