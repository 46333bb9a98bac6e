"""Manifest kinds and the App Container version of this schema.

A manifest is valid when its JSON decodes into an ImageManifest or a
PodManifest; a manifest built in code is valid when it encodes to JSON
without error.
"""

import json
from dataclasses import dataclass, field

from .errors import SchemaError
from .names import ACKind, _dumps, _optional_string, _parse_name
from .versions import SemVer

VERSION = "0.5.1+git"
APP_CONTAINER_VERSION = SemVer.parse(VERSION)

__all__ = [
    "APP_CONTAINER_VERSION",
    "VERSION",
    "Kind",
    "_dumps",
    "_parse_name",
]


def _fold(data):
    """Map lower-cased keys to values, as field names match case-insensitively."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SchemaError("expected a JSON object")
    return {key.lower(): value for key, value in data.items()}


def _parse_kind(value):
    kind = ACKind(_optional_string(value, "acKind"))
    kind.validate()
    return kind


def _parse_version(value):
    return SemVer.parse("" if value is None else value)


def _items(value, parse, what):
    if value is None:
        return []
    if not isinstance(value, list):
        raise SchemaError(f"{what} must be a JSON array")
    return [parse(item) for item in value]


def _text(value):
    """Return the text of a kind, version or name, raising if it cannot be written."""
    value._check()
    return str(value)


@dataclass
class Kind:
    """Just the version and kind of a manifest, to tell manifests apart."""

    ac_version: SemVer = field(default_factory=SemVer)
    ac_kind: ACKind = ACKind("")

    def __post_init__(self):
        self.ac_kind = ACKind(self.ac_kind)

    def to_json(self):
        return _dumps({"acVersion": _text(self.ac_version), "acKind": _text(self.ac_kind)})

    @classmethod
    def from_json(cls, data):
        fields = _fold(json.loads(data))
        kind = cls()
        if "acversion" in fields:
            kind.ac_version = _parse_version(fields["acversion"])
        if "ackind" in fields:
            kind.ac_kind = _parse_kind(fields["ackind"])
        return kind