"""Semantic versions as used for the acVersion field."""

import json
from dataclasses import dataclass

import semver

from .errors import ACVersionError
from .names import _decode_string, _JsonString

ZERO_SEMVER = "SemVer cannot be zero"
BAD_SEMVER = "SemVer is bad"


@dataclass(frozen=True)
class SemVer(_JsonString):
    """A semantic version that must not be all zero."""

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: str = ""
    metadata: str = ""

    @classmethod
    def parse(cls, value):
        """Parse a semantic version string, raising ACVersionError if bad or zero."""
        if not isinstance(value, str):
            raise ACVersionError(BAD_SEMVER)
        try:
            parsed = semver.Version.parse(value)
        except (ValueError, TypeError) as exc:
            raise ACVersionError(BAD_SEMVER) from exc
        version = cls(
            major=parsed.major,
            minor=parsed.minor,
            patch=parsed.patch,
            prerelease=parsed.prerelease or "",
            metadata=parsed.build or "",
        )
        version._check()
        return version

    def empty(self):
        return self == SemVer()

    def _check(self):
        if self.empty():
            raise ACVersionError(ZERO_SEMVER)

    def to_json(self):
        """Encode as a JSON string, raising ACVersionError for a zero version."""
        self._check()
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, data):
        """Decode a JSON string holding a non-zero semantic version."""
        return cls.parse(_decode_string(data))

    def __str__(self):
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.metadata:
            text += f"+{self.metadata}"
        return text