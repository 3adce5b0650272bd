"""Weekly opening-hours model and local-time helpers.

All venue times are wall-clock times in a single reference zone. The zone
is either a fixed UTC offset (``UTC+06:00``) or an IANA name
(``Asia/Dhaka``).
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta, timezone, tzinfo
from enum import Enum
from functools import lru_cache
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_OFFSET_PATTERN = re.compile(r"^(?:UTC|GMT)?([+-])(\d{1,2})(?::?(\d{2}))?$", re.IGNORECASE)


class Weekday(str, Enum):
    """Weekday keys used in opening-hours documents."""

    SUN = "SUN"
    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"
    SAT = "SAT"

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        # date.weekday(): Monday == 0
        return _BY_WEEKDAY_INDEX[day.weekday()]


_BY_WEEKDAY_INDEX = (
    Weekday.MON,
    Weekday.TUE,
    Weekday.WED,
    Weekday.THU,
    Weekday.FRI,
    Weekday.SAT,
    Weekday.SUN,
)


def parse_hhmm(value: str) -> time:
    """Parse a strict ``HH:MM`` string.

    Raises:
        ValueError: If the value is not a 24-hour ``HH:MM`` time.
    """
    match = HHMM_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return time(int(match.group(1)), int(match.group(2)))


def format_hhmm(value: time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


@lru_cache(maxsize=64)
def resolve_timezone(name: str) -> tzinfo:
    """Resolve a zone name or fixed UTC offset into a tzinfo.

    Accepts ``UTC``, ``UTC+06:00``, ``+0600``, ``GMT-3`` and IANA names.

    Raises:
        ValueError: If the name is neither an offset nor a known zone.
    """
    cleaned = (name or "").strip().replace(" ", "")
    if cleaned.upper() in ("UTC", "Z", "GMT"):
        return UTC

    match = _OFFSET_PATTERN.match(cleaned)
    if match:
        sign, hours, minutes = match.groups()
        offset = timedelta(hours=int(hours), minutes=int(minutes or 0))
        if offset >= timedelta(hours=24):
            raise ValueError(f"UTC offset out of range: {name}")
        return timezone(-offset if sign == "-" else offset)

    try:
        return ZoneInfo(cleaned)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown time zone: {name}") from e


def local_to_instant(day: date, at: time, tz: tzinfo) -> datetime:
    """Return the UTC instant of wall-clock ``at`` on local ``day``."""
    return datetime.combine(day, at, tzinfo=tz).astimezone(UTC)


@dataclass(frozen=True)
class DayRule:
    """Opening rule for one weekday."""

    open: time
    close: time
    closed: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DayRule":
        closed = bool(data.get("closed", False))
        if closed and not all(
            HHMM_PATTERN.match(str(data.get(key) or "")) for key in ("open", "close")
        ):
            # Times on a closed day are never read
            return cls(open=time(0, 0), close=time(0, 0), closed=True)
        return cls(
            open=parse_hhmm(data.get("open", "")),
            close=parse_hhmm(data.get("close", "")),
            closed=closed,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "open": format_hhmm(self.open),
            "close": format_hhmm(self.close),
            "closed": self.closed,
        }


@dataclass(frozen=True)
class OpeningHours:
    """Weekly schedule: at most one rule per weekday.

    A weekday without a rule is treated as closed.
    """

    rules: Mapping[Weekday, DayRule] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "OpeningHours":
        """Parse a ``{"MON": {"open": ..., "close": ..., "closed": ...}}`` document.

        Raises:
            ValueError: On an unknown weekday key or malformed time.
        """
        rules: dict[Weekday, DayRule] = {}
        for key, value in (data or {}).items():
            try:
                weekday = Weekday(str(key).upper())
            except ValueError as e:
                raise ValueError(f"Unknown weekday '{key}'") from e
            if value is None:
                continue
            rules[weekday] = DayRule.from_dict(value)
        return cls(rules=rules)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {day.value: rule.to_dict() for day, rule in self.rules.items()}

    def rule_for(self, day: date) -> DayRule | None:
        return self.rules.get(Weekday.from_date(day))
