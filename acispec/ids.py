"""Image hashes and UUIDs."""

import hashlib
import json
import re
from dataclasses import dataclass

from .errors import SchemaError
from .names import _decode_string, _JsonString

_SHA512_SIZE = 64
_MAX_HASH_SIZE = _SHA512_SIZE // 2 + len("sha512-")
_HEX32 = re.compile(r"[0-9a-fA-F]{32}")


@dataclass(frozen=True)
class UUID(_JsonString):
    """A 16-byte UUID written as lower-case hex groups."""

    data: bytes = bytes(16)

    def __post_init__(self):
        if len(self.data) != 16:
            raise SchemaError("UUID must be 16 bytes")

    @classmethod
    def parse(cls, value):
        """Parse a UUID with or without dashes."""
        value = value.replace("-", "")
        if len(value) != 32:
            raise SchemaError("bad UUID length != 32")
        if not _HEX32.fullmatch(value):
            raise SchemaError(f"invalid hex in UUID: {value!r}")
        return cls(bytes.fromhex(value))

    def empty(self):
        return self.data == bytes(16)

    def _check(self):
        if self.empty():
            raise SchemaError("UUID cannot be empty")

    def to_json(self):
        """Encode as a JSON string; an all-zero UUID is refused."""
        self._check()
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, data):
        """Decode a JSON string holding a non-empty UUID."""
        uuid = cls.parse(_decode_string(data))
        uuid._check()
        return uuid

    def __str__(self):
        text = self.data.hex()
        return f"{text[:8]}-{text[8:12]}-{text[12:16]}-{text[16:20]}-{text[20:]}"


@dataclass(frozen=True)
class Hash(_JsonString):
    """A hash of the form ``<type>-<value>``; only sha512 is recognised."""

    typ: str = ""
    val: str = ""

    @classmethod
    def parse(cls, value):
        parts = value.split("-")
        if len(parts) != 2:
            raise SchemaError("badly formatted hash string")
        result = cls(*parts)
        result.validate()
        return result

    @classmethod
    def sha512(cls, data):
        """Return the sha512 hash of ``data``."""
        return cls.parse(f"sha512-{hashlib.sha512(data).hexdigest()}")

    def empty(self):
        return self == Hash()

    def validate(self):
        if self.typ == "":
            raise SchemaError("unexpected empty hash type")
        if self.typ != "sha512":
            raise SchemaError(f"unrecognized hash type: {self.typ}")
        if self.val == "":
            raise SchemaError("unexpected empty hash value")

    def to_json(self):
        """Encode as a JSON string, raising SchemaError if invalid."""
        self.validate()
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, data):
        """Decode a JSON string holding a valid hash."""
        return cls.parse(_decode_string(data))

    def __str__(self):
        return f"{self.typ}-{self.val}"


def short_hash(value):
    """Shorten a hash string to its type and the first half of a sha512 digest."""
    return value[:_MAX_HASH_SIZE]