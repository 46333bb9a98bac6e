"""Kinds of manifest and App Container names."""

import json
import re
from dataclasses import dataclass

from .errors import ACKindError, ACNameError, SchemaError

NO_ACKIND = "ACKind must be set"
EMPTY_ACNAME = "ACName cannot be empty"
INVALID_EDGE = "ACName must start and end with only lower case alphanumeric characters"
INVALID_CHAR = (
    "ACName must contain only lower case "
    'alphanumeric characters plus ".", "-", "/"'
)

# A whole string must match this (use fullmatch) to be a valid ACName.
VALID_ACNAME = re.compile(r"[a-z0-9]+([-./][a-z0-9]+)*")

_INVALID_CHARS = re.compile(r"[^a-z0-9./-]")
_INVALID_EDGES = re.compile(r"^[./-]+|[./-]+\Z")
_KNOWN_KINDS = frozenset({"ImageManifest", "PodManifest"})


def _decode_string(data):
    """Decode a JSON document that must hold a single string."""
    value = json.loads(data)
    if not isinstance(value, str):
        raise SchemaError(f"expected a JSON string, got {value!r}")
    return value


def _dumps(data):
    """Encode ``data`` as compact JSON."""
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _quote(text):
    return json.dumps(str(text))


def _optional_string(value, what):
    """Treat a missing value as "" and reject anything that is not a string."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SchemaError(f"{what} must be a string, got {value!r}")
    return value


def _string_field(item, key):
    return _optional_string(item.get(key), key)


def _object_list(data, plural, singular):
    """Return ``data`` as a list of JSON objects; None counts as empty."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise SchemaError(f"{plural} must be a JSON array")
    if not all(isinstance(item, dict) for item in data):
        raise SchemaError(f"{singular} must be a JSON object")
    return data


class _JsonString:
    """Encoding to and from a JSON string for values written as text."""

    __slots__ = ()

    def _check(self):
        self.validate()

    def to_json(self):
        self._check()
        return json.dumps(str(self))

    @classmethod
    def _from_text(cls, text):
        return cls.parse(text)

    @classmethod
    def from_json(cls, data):
        return cls._from_text(_decode_string(data))


class _JsonData:
    """Encoding to and from JSON for values that have to_data and from_data."""

    __slots__ = ()

    def to_json(self):
        return _dumps(self.to_data())

    @classmethod
    def from_json(cls, data):
        return cls.from_data(json.loads(data))


class ACKind(_JsonString, str):
    """The kind of a manifest; only known kinds are accepted."""

    __slots__ = ()

    def validate(self):
        """Raise ACKindError unless this is a known kind."""
        if self in _KNOWN_KINDS:
            return
        if not self:
            raise ACKindError(NO_ACKIND)
        raise ACKindError(f"bad ACKind: {self}")

    def to_json(self):
        """Encode as a JSON string, raising ACKindError for an unknown kind."""
        self.validate()
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, data):
        """Decode a JSON string holding a known kind."""
        kind = cls(_decode_string(data))
        kind.validate()
        return kind


class ACName(_JsonString, str):
    """A lower-case DNS-like name that may also contain "/"."""

    __slots__ = ()

    @classmethod
    def parse(cls, value):
        """Return ``value`` as an ACName, raising ACNameError if it is invalid."""
        name = cls(value)
        name.validate()
        return name

    def validate(self):
        if not self:
            raise ACNameError(EMPTY_ACNAME)
        if _INVALID_CHARS.search(self):
            raise ACNameError(INVALID_CHAR)
        if _INVALID_EDGES.search(self):
            raise ACNameError(INVALID_EDGE)

    def equals(self, other):
        """Compare with another name, ignoring case."""
        return str(self).lower() == str(other).lower()

    def empty(self):
        return str(self) == ""

    def to_json(self):
        """Encode as a JSON string, raising ACNameError if invalid."""
        self.validate()
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, data):
        """Decode a JSON string holding a valid name."""
        return cls.parse(_decode_string(data))


def _parse_name(raw):
    return ACName.parse(_optional_string(raw, "name"))


def sanitize_acname(value):
    """Suggest a valid ACName built from ``value``.

    Upper case letters are lowered, invalid characters become dashes and
    leading or trailing ".", "-" and "/" are removed.
    """
    value = value.lower()
    value = _INVALID_CHARS.sub("-", value)
    value = _INVALID_EDGES.sub("", value)
    if not value:
        raise SchemaError("must contain at least one valid character")
    return value


@dataclass
class _NamedValue:
    """A value stored under an ACName."""

    name: ACName = ACName("")
    value: str = ""

    def __post_init__(self):
        self.name = ACName(self.name)


class _NamedValues(_JsonData, list):
    """An ordered list of named values whose names are unique."""

    _item = _NamedValue
    _plural = "entries"
    _singular = "entry"

    def _check_name(self, name):
        """Reject a name before uniqueness is checked; any name is fine here."""

    def _seen(self):
        seen = {}
        for entry in self:
            self._check_name(entry.name)
            if entry.name in seen:
                raise SchemaError(f"duplicate {self._plural} of name {_quote(entry.name)}")
            seen[entry.name] = entry.value
        return seen

    def validate(self):
        self._seen()

    def get(self, name):
        """Return the value stored under ``name``, or None."""
        for entry in self:
            if str(entry.name) == name:
                return entry.value
        return None

    def to_data(self):
        self.validate()
        result = []
        for entry in self:
            entry.name.validate()
            result.append({"name": str(entry.name), "value": entry.value})
        return result

    @classmethod
    def from_data(cls, data):
        entries = cls()
        for item in _object_list(data, cls._plural, cls._singular):
            name = _parse_name(item["name"]) if "name" in item else ACName("")
            entries.append(cls._item(name, _string_field(item, "value")))
        entries.validate()
        return entries