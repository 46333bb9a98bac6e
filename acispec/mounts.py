"""Mount points, volumes and ports of apps and pods."""

import json
import posixpath
import re
from dataclasses import dataclass
from urllib.parse import unquote_plus

from .errors import SchemaError
from .names import ACName

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _compact(data):
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _unescape(text):
    if _BAD_ESCAPE.search(text):
        raise SchemaError(f"invalid URL escape in {text!r}")
    return unquote_plus(text)


def _parse_params(value):
    """Split ``name,key=value,...`` into a mapping of keys to their values."""
    params = {}
    for pair in ("name=" + value).replace(",", "&").split("&"):
        if ";" in pair:
            raise SchemaError("invalid semicolon separator in query")
        if not pair:
            continue
        key, _, text = pair.partition("=")
        params.setdefault(_unescape(key), []).append(_unescape(text))
    return params


def _single(key, values):
    if len(values) > 1:
        quoted = " ".join(json.dumps(v) for v in values)
        raise SchemaError(f"label {key} with multiple values [{quoted}]")
    return values[0]


def _parse_bool(text):
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise SchemaError(f"invalid boolean {text!r}")


def _parse_name(data):
    raw = data.get("name", "")
    if raw is None:
        raw = ""
    if not isinstance(raw, str):
        raise SchemaError(f"name must be a string, got {raw!r}")
    if "name" not in data:
        return ACName("")
    return ACName.parse(raw)


def _string(data, key):
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SchemaError(f"{key} must be a string, got {value!r}")
    return value


def _flag(data, key):
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise SchemaError(f"{key} must be a boolean, got {value!r}")
    return value


def _unsigned(data, key):
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaError(f"{key} must be a non-negative integer, got {value!r}")
    return value


def _require_object(data, what):
    if not isinstance(data, dict):
        raise SchemaError(f"{what} must be a JSON object")


@dataclass
class MountPoint:
    """A named place in an app's filesystem where a volume may be mounted."""

    name: ACName = ACName("")
    path: str = ""
    read_only: bool = False

    def __post_init__(self):
        self.name = ACName(self.name)

    def validate(self):
        if self.name.empty():
            raise SchemaError("name must be set")
        if not self.path:
            raise SchemaError("path must be set")

    def to_data(self):
        self.name.validate()
        data = {"name": str(self.name), "path": self.path}
        if self.read_only:
            data["readOnly"] = True
        return data

    @classmethod
    def from_data(cls, data):
        _require_object(data, "mountPoint")
        return cls(_parse_name(data), _string(data, "path"), _flag(data, "readOnly"))


def mount_point_from_string(value):
    """Build a mount point from ``name,path=...,readOnly=...``."""
    fields = {}
    for key, values in _parse_params(value).items():
        text = _single(key, values)
        if key == "name":
            fields["name"] = ACName.parse(text)
        elif key == "path":
            fields["path"] = text
        elif key == "readOnly":
            fields["read_only"] = _parse_bool(text)
        else:
            raise SchemaError(f"unknown mountpoint parameter {json.dumps(key)}")
    mount = MountPoint(**fields)
    mount.validate()
    return mount


@dataclass
class Volume:
    """A volume made available to every app of a pod."""

    name: ACName = ACName("")
    kind: str = ""
    source: str = ""
    read_only: bool | None = None

    def __post_init__(self):
        self.name = ACName(self.name)

    def validate(self):
        if self.name.empty():
            raise SchemaError("name must be set")
        if self.kind == "empty":
            if self.source:
                raise SchemaError("source for empty volume must be empty")
        elif self.kind == "host":
            if not self.source:
                raise SchemaError("source for host volume cannot be empty")
            if not posixpath.isabs(self.source):
                raise SchemaError("source for host volume must be absolute path")
        else:
            raise SchemaError('unrecognized volume kind: should be one of "empty", "host"')

    def __str__(self):
        text = f"{self.name},kind={self.kind},readOnly={str(bool(self.read_only)).lower()}"
        if self.source:
            text += f",source={self.source}"
        return text

    def to_data(self):
        self.validate()
        self.name.validate()
        data = {"name": str(self.name), "kind": self.kind}
        if self.source:
            data["source"] = self.source
        if self.read_only is not None:
            data["readOnly"] = self.read_only
        return data

    @classmethod
    def from_data(cls, data):
        _require_object(data, "volume")
        read_only = data.get("readOnly")
        if read_only is not None and not isinstance(read_only, bool):
            raise SchemaError(f"readOnly must be a boolean, got {read_only!r}")
        volume = cls(_parse_name(data), _string(data, "kind"), _string(data, "source"), read_only)
        volume.validate()
        return volume

    def to_json(self):
        return _compact(self.to_data())

    @classmethod
    def from_json(cls, data):
        return cls.from_data(json.loads(data))


def volume_from_string(value):
    """Build a volume from ``name,kind=...,source=...,readOnly=...``."""
    fields = {}
    for key, values in _parse_params(value).items():
        text = _single(key, values)
        if key == "name":
            fields["name"] = ACName.parse(text)
        elif key == "kind":
            fields["kind"] = text
        elif key == "source":
            fields["source"] = text
        elif key == "readOnly":
            fields["read_only"] = _parse_bool(text)
        else:
            raise SchemaError(f"unknown volume parameter {json.dumps(key)}")
    volume = Volume(**fields)
    volume.validate()
    return volume


@dataclass
class Port:
    """A port an app listens on."""

    name: ACName = ACName("")
    protocol: str = ""
    port: int = 0
    socket_activated: bool = False

    def __post_init__(self):
        self.name = ACName(self.name)

    def to_data(self):
        self.name.validate()
        return {
            "name": str(self.name),
            "protocol": self.protocol,
            "port": self.port,
            "socketActivated": self.socket_activated,
        }

    @classmethod
    def from_data(cls, data):
        _require_object(data, "port")
        return cls(
            _parse_name(data),
            _string(data, "protocol"),
            _unsigned(data, "port"),
            _flag(data, "socketActivated"),
        )


@dataclass
class ExposedPort:
    """An app port exposed on the host."""

    name: ACName = ACName("")
    host_port: int = 0

    def __post_init__(self):
        self.name = ACName(self.name)

    def to_data(self):
        self.name.validate()
        return {"name": str(self.name), "hostPort": self.host_port}

    @classmethod
    def from_data(cls, data):
        _require_object(data, "exposed port")
        return cls(_parse_name(data), _unsigned(data, "hostPort"))