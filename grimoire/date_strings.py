"""Dates and times rendered in common string formats.

Formatting follows a fixed, English-language token set rather than the
current locale, so output is the same everywhere.
"""

from __future__ import annotations

import email.utils
import re
from datetime import datetime, timedelta

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_COMPOSITES = {
    "c": "%a %b %e %H:%M:%S %Y",
    "x": "%m/%d/%y",
    "X": "%H:%M:%S",
    "T": "%H:%M:%S",
}

_SPEC = re.compile(r"%(-?)(.)", re.DOTALL)

# A fixed moment shows where padding comes into play. The fraction is
# 12345 nanoseconds, which a datetime cannot hold, so it is kept apart.
_TOKENS_MOMENT = datetime(2023, 1, 2, 14, 5, 6)
_TOKENS_NANOSECOND = 12_345

_TOKENS_TEMPLATE = """
Year: 
%%Y: "%Y" | %%y: "%y"

Month:
%%B: "%B" | %%b "%b" | %%m: "%m" | %%-m: "%-m"

Day of Month:
%%d: "%d" | %%-d: "%-d"

Day of Week:
%%A: "%A" | %%a: "%a" | %%w "%w"

Day of Year:
%%j: "%j" | %%-j "%-j"

Hour:
%%H: "%H" | %%-H: "%-H" | %%I: "%I" | %%-I: "%-I"
(%%H is 0 padded if < 10)
(%%-H is not 0 padded if < 10)

Minute:
%%M: "%M" | %%-M: "%-M"

Second:
%%S: "%S" | %%-S: "%-S"

Microsecond:
%%f: "%f" | %%-f: "%-f"

Sunday Based Week Number:
%%U: "%U" | %%-U: "%-U"

Monday Based Week Number:
%%W: "%W" | %%-W: "%-W"

AM/PM:
%%p: "%p"

Locale DateTime String:
%%c: "%c"

Locale Date String:
%%x: "%x"

Locale Time String:
%%X: "%X"


"""


def _now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now().astimezone()
    if now.tzinfo is None or now.utcoffset() is None:
        return now.astimezone()
    return now


def _format(moment: datetime, template: str, nanosecond: int | None = None) -> str:
    """Expand ``%`` tokens in ``template``; ``%-X`` drops the padding."""
    if nanosecond is None:
        nanosecond = moment.microsecond * 1000
    hour12 = moment.hour % 12 or 12
    numbers = {
        "Y": (moment.year, 4, "0"),
        "y": (moment.year % 100, 2, "0"),
        "m": (moment.month, 2, "0"),
        "d": (moment.day, 2, "0"),
        "e": (moment.day, 2, " "),
        "H": (moment.hour, 2, "0"),
        "I": (hour12, 2, "0"),
        "M": (moment.minute, 2, "0"),
        "S": (moment.second, 2, "0"),
        "j": (moment.timetuple().tm_yday, 3, "0"),
        "f": (nanosecond, 9, "0"),
        "U": (int(moment.strftime("%U")), 2, "0"),
        "W": (int(moment.strftime("%W")), 2, "0"),
        "w": ((moment.weekday() + 1) % 7, 1, "0"),
    }
    words = {
        "B": _MONTHS[moment.month - 1],
        "b": _MONTHS[moment.month - 1][:3],
        "A": _DAYS[moment.weekday()],
        "a": _DAYS[moment.weekday()][:3],
        "p": "PM" if moment.hour >= 12 else "AM",
        "%": "%",
    }

    def replace(match: re.Match[str]) -> str:
        unpadded, spec = match.group(1) == "-", match.group(2)
        if spec in numbers:
            value, width, fill = numbers[spec]
            return str(value) if unpadded else str(value).rjust(width, fill)
        if spec in words:
            return words[spec]
        if spec in _COMPOSITES:
            return _format(moment, _COMPOSITES[spec], nanosecond)
        raise ValueError(f"Unsupported format specifier: {match.group(0)!r}")

    return _SPEC.sub(replace, template)


def _offset(moment: datetime, use_z: bool) -> str:
    offset = moment.utcoffset() or timedelta(0)
    if use_z and not offset:
        return "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{mins:02d}"


def time_format_year(now: datetime | None = None) -> str:
    """Return the four-digit year."""
    return _format(_now(now), "%Y")


def simple_clock(now: datetime | None = None) -> str:
    """Return a clock time such as ``2:05:06pm``: unpadded hour, lowercase am/pm."""
    return _format(_now(now), "%-I:%M:%S%p").lower()


def am_pm_lc(now: datetime | None = None) -> str:
    """Return ``am`` or ``pm``."""
    return _format(_now(now), "%p").lower()


def time_rfc3339(now: datetime | None = None) -> str:
    """Return an RFC 3339 timestamp to the second, with ``Z`` for UTC."""
    moment = _now(now)
    return _format(moment, "%Y-%m-%dT%H:%M:%S") + _offset(moment, use_z=True)


def time_rfc3339_with_ms(now: datetime | None = None) -> str:
    """Return an RFC 3339 timestamp with as many fraction digits as needed.

    The fraction is left out when zero, has three digits for whole
    milliseconds and six otherwise. The offset is always numeric.
    """
    moment = _now(now)
    micro = moment.microsecond
    if micro == 0:
        fraction = ""
    elif micro % 1000 == 0:
        fraction = f".{micro // 1000:03d}"
    else:
        fraction = f".{micro:06d}"
    return _format(moment, "%Y-%m-%dT%H:%M:%S") + fraction + _offset(moment, use_z=False)


def time_rfc2822(now: datetime | None = None) -> str:
    """Return an RFC 2822 timestamp such as ``Mon, 02 Jan 2023 14:05:06 +0100``."""
    return email.utils.format_datetime(_now(now))


def time_tokens() -> str:
    """Return a table of every supported token applied to a fixed moment."""
    return _format(_TOKENS_MOMENT, _TOKENS_TEMPLATE, _TOKENS_NANOSECOND)


def main(argv: list[str] | None = None) -> int:
    """Print the current time in each format, then the token table."""
    now = _now(None)
    print(f"am/pm (lowercase) via function:\n{am_pm_lc(now)}\n\n")
    print(f"simple clock via function:\n{simple_clock(now)}\n\n")
    print(f"Format: Year - %Y\n{time_format_year(now)}\n\n")
    print(f"RFC 3339\n{time_rfc3339(now)}\n\n")
    print(f"RFC 3339 (with ms)\n{time_rfc3339_with_ms(now)}\n\n")
    print(f"RFC 2822\n{time_rfc2822(now)}\n\n")
    print(f"{time_tokens()}\n\n")
    return 0