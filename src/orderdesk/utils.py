from datetime import datetime
from datetime import timezone
import re

TIME_RE = re.compile(r"^(0[0-9]|1[0-9]|2[0-3]):[0-5][0-9]$")


def validate_time(time: str) -> bool:
    """True for a 24-hour ``HH:mm`` string, e.g. ``"10:00"``; ``"25:00"`` is rejected."""
    return bool(TIME_RE.match(time))


def convert_time(time: str) -> datetime:
    """Turn a validated ``HH:mm`` into a UTC datetime on 1970-01-01.

    convert_time("10:00") -> 1970-01-01 10:00:00+00:00
    """
    parsed = datetime.strptime(time, "%H:%M")
    return datetime(1970, 1, 1, parsed.hour, parsed.minute, tzinfo=timezone.utc)
