"""Dates in strict RFC 3339 form."""

import json
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .errors import SchemaError
from .names import _decode_string, _JsonString

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(Z|[+-]\d{2}:\d{2})"
)


def _parse_offset(text):
    if text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    hours, minutes = int(text[1:3]), int(text[4:6])
    if minutes >= 60:
        raise ValueError("time zone offset minute out of range")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


@dataclass(frozen=True)
class Date(_JsonString):
    """A point in time read from and written as an RFC 3339 string."""

    value: datetime

    @classmethod
    def parse(cls, value):
        match = _RFC3339.fullmatch(value)
        if match is None:
            raise SchemaError(f"bad Date: cannot parse {value!r} as RFC 3339")
        year, month, day, hour, minute, second, fraction, offset = match.groups()
        microsecond = int((fraction or "0")[:6].ljust(6, "0"))
        try:
            moment = datetime(
                int(year),
                int(month),
                int(day),
                int(hour),
                int(minute),
                int(second),
                microsecond,
                tzinfo=_parse_offset(offset),
            )
        except ValueError as exc:
            raise SchemaError(f"bad Date: {exc}") from exc
        return cls(moment)

    def _check(self):
        """Any date can be written."""

    def to_json(self):
        """Encode as an RFC 3339 JSON string."""
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, data):
        """Decode a JSON string holding an RFC 3339 date."""
        return cls.parse(_decode_string(data))

    def __str__(self):
        moment = self.value
        stamp = (
            f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
            f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        )
        offset = moment.utcoffset() or timedelta(0)
        if not offset:
            return stamp + "Z"
        sign = "-" if offset < timedelta(0) else "+"
        minutes = abs(int(offset.total_seconds())) // 60
        return f"{stamp}{sign}{minutes // 60:02d}:{minutes % 60:02d}"