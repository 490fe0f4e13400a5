"""UTC date handling for VCS command lines and log output."""

from __future__ import annotations

import re
from datetime import datetime, timezone

UTC_XML_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_SVN_DATE = re.compile(r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:?\d{2})?$")


def to_utc(value: datetime) -> datetime:
    """Convert to an aware UTC datetime; naive values are taken as local time."""
    return value.astimezone(timezone.utc)


def format_command_date(value: datetime) -> str:
    # Only numeric directives, so the output does not depend on the host locale.
    return to_utc(value).strftime(UTC_XML_DATE_FORMAT)


def parse_command_date(text: str) -> datetime:
    return datetime.strptime(text, UTC_XML_DATE_FORMAT).replace(tzinfo=timezone.utc)


def parse_svn_date(text: str) -> datetime:
    """Parse an svn log timestamp such as ``2024-01-02T10:00:00.123456Z``."""
    match = _SVN_DATE.match(text.strip())
    if not match:
        raise ValueError(f"Unrecognized date: {text!r}")
    base, fraction, zone = match.groups()
    parsed = datetime.strptime(base, "%Y-%m-%dT%H:%M:%S")
    if fraction:
        parsed = parsed.replace(microsecond=int(fraction[:6].ljust(6, "0")))
    if zone and zone != "Z":
        offset = datetime.strptime(zone.replace(":", ""), "%z").tzinfo
        return parsed.replace(tzinfo=offset).astimezone(timezone.utc)
    return parsed.replace(tzinfo=timezone.utc)
