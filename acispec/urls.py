"""HTTP and HTTPS URLs."""

import json
from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

from .errors import SchemaError
from .names import _decode_string, _JsonString

_ALLOWED_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class URL(_JsonString):
    """A URL whose scheme must be http or https."""

    scheme: str = ""
    netloc: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""

    @classmethod
    def parse(cls, value):
        try:
            parts = urlsplit(value)
        except ValueError as exc:
            raise SchemaError(f"bad URL: {exc}") from exc
        url = cls(*parts)
        url.validate()
        return url

    def validate(self):
        """Raise SchemaError unless the scheme is http or https."""
        if self.scheme not in _ALLOWED_SCHEMES:
            raise SchemaError("bad URL scheme, must be http/https")

    def to_json(self):
        """Encode as a JSON string, raising SchemaError for a bad scheme."""
        self.validate()
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, data):
        """Decode a JSON string holding an http or https URL."""
        return cls.parse(_decode_string(data))

    def __str__(self):
        return urlunsplit((self.scheme, self.netloc, self.path, self.query, self.fragment))