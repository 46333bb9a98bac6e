"""Isolators that restrict what an app may do or the resources it may use."""

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from .errors import SchemaError
from .names import ACName

LINUX_CAPABILITIES_RETAIN_SET_NAME = "os/linux/capabilities-retain-set"
LINUX_CAPABILITIES_REVOKE_SET_NAME = "os/linux/capabilities-revoke-set"

RESOURCE_BLOCK_BANDWIDTH_NAME = "resource/block-bandwidth"
RESOURCE_BLOCK_IOPS_NAME = "resource/block-iops"
RESOURCE_CPU_NAME = "resource/cpu"
RESOURCE_MEMORY_NAME = "resource/memory"
RESOURCE_NETWORK_BANDWIDTH_NAME = "resource/network-bandwidth"

DEFAULT_TRUE = "default must be false"
DEFAULT_REQUIRED = "default must be true"
REQUEST_NON_EMPTY = "request not supported by this resource, must be empty"

_NUMBER = re.compile(r"([+-]?(?:\d+(?:\.\d*)?|\.\d+))(.*)")
_EXPONENT = re.compile(r"[eE]([+-]?\d+)")
_BINARY_SUFFIXES = {"Ki": 10, "Mi": 20, "Gi": 30, "Ti": 40, "Pi": 50, "Ei": 60}
_DECIMAL_SUFFIXES = {
    "n": -9,
    "u": -6,
    "m": -3,
    "": 0,
    "k": 3,
    "M": 6,
    "G": 9,
    "T": 12,
    "P": 15,
    "E": 18,
}

_CONSTRUCTORS = {}


def _parse_quantity(raw):
    """Parse a resource quantity such as ``"30"``, ``"1G"`` or ``"2Gi"``."""
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
        raise SchemaError(f"quantity must be a string or number, got {raw!r}")
    text = str(raw)
    match = _NUMBER.fullmatch(text)
    if match is None:
        raise SchemaError(f"bad quantity: {text!r}")
    number, suffix = match.groups()
    try:
        amount = Decimal(number)
    except InvalidOperation as exc:
        raise SchemaError(f"bad quantity: {text!r}") from exc
    if suffix in _BINARY_SUFFIXES:
        return amount * (2 ** _BINARY_SUFFIXES[suffix])
    if suffix in _DECIMAL_SUFFIXES:
        return amount.scaleb(_DECIMAL_SUFFIXES[suffix])
    exponent = _EXPONENT.fullmatch(suffix)
    if exponent is None:
        raise SchemaError(f"bad quantity suffix: {text!r}")
    return amount.scaleb(int(exponent.group(1)))


def _require_object(data, what):
    if not isinstance(data, dict):
        raise SchemaError(f"{what} must be a JSON object")


class IsolatorValue(ABC):
    """The parsed value of a recognised isolator."""

    @abstractmethod
    def load(self, data):
        """Fill this value from decoded JSON data."""

    @abstractmethod
    def validate(self):
        """Raise SchemaError if this value is not acceptable."""


@dataclass
class LinuxCapabilitiesSet(IsolatorValue):
    """A set of Linux capabilities."""

    capabilities: list = field(default_factory=list)

    def load(self, data):
        if data is None:
            return
        _require_object(data, "capabilities set")
        values = data.get("set")
        if values is None:
            values = []
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise SchemaError("set must be a JSON array of strings")
        self.capabilities = list(values)

    def validate(self):
        if not self.capabilities:
            raise SchemaError("set must be non-empty")


class LinuxCapabilitiesRetainSet(LinuxCapabilitiesSet):
    """Capabilities an app keeps; all others are dropped."""


class LinuxCapabilitiesRevokeSet(LinuxCapabilitiesSet):
    """Capabilities taken away from an app."""


@dataclass
class Resource(IsolatorValue):
    """A resource limit; quantities are exact decimals or None when unset."""

    default: bool = False
    request: Decimal | None = None
    limit: Decimal | None = None

    def load(self, data):
        if data is None:
            return
        _require_object(data, "resource")
        default = data.get("default")
        if default is not None:
            if not isinstance(default, bool):
                raise SchemaError(f"default must be a boolean, got {default!r}")
            self.default = default
        self.request = _parse_quantity(data.get("request"))
        self.limit = _parse_quantity(data.get("limit"))

    def validate(self):
        """Accept any values; specific resources narrow this."""


class _DefaultOnlyResource(Resource):
    def validate(self):
        if not self.default:
            raise SchemaError(DEFAULT_REQUIRED)
        if self.request is not None:
            raise SchemaError(REQUEST_NON_EMPTY)


class _NoDefaultResource(Resource):
    def validate(self):
        if self.default:
            raise SchemaError(DEFAULT_TRUE)


class ResourceBlockBandwidth(_DefaultOnlyResource):
    """Block device bandwidth."""


class ResourceBlockIOPS(_DefaultOnlyResource):
    """Block device operations per second."""


class ResourceCPU(_NoDefaultResource):
    """Processor time."""


class ResourceMemory(_NoDefaultResource):
    """Memory."""


class ResourceNetworkBandwidth(_DefaultOnlyResource):
    """Network bandwidth."""


def add_isolator_value_constructor(name, constructor):
    """Register a callable that makes the value of isolators called ``name``."""
    _CONSTRUCTORS[ACName(name)] = constructor


for _name, _constructor in (
    (LINUX_CAPABILITIES_RETAIN_SET_NAME, LinuxCapabilitiesRetainSet),
    (LINUX_CAPABILITIES_REVOKE_SET_NAME, LinuxCapabilitiesRevokeSet),
    (RESOURCE_BLOCK_BANDWIDTH_NAME, ResourceBlockBandwidth),
    (RESOURCE_BLOCK_IOPS_NAME, ResourceBlockIOPS),
    (RESOURCE_CPU_NAME, ResourceCPU),
    (RESOURCE_MEMORY_NAME, ResourceMemory),
    (RESOURCE_NETWORK_BANDWIDTH_NAME, ResourceNetworkBandwidth),
):
    add_isolator_value_constructor(_name, _constructor)


@dataclass
class Isolator:
    """A named isolator; ``value`` is None when the name is not recognised."""

    name: ACName = ACName("")
    value_raw: object = None
    value: IsolatorValue | None = None

    def __post_init__(self):
        self.name = ACName(self.name)

    def to_data(self):
        self.name.validate()
        return {"name": str(self.name), "value": self.value_raw}

    @classmethod
    def from_data(cls, data):
        _require_object(data, "isolator")
        name = ACName("")
        if "name" in data:
            raw = data["name"]
            if raw is None:
                raw = ""
            if not isinstance(raw, str):
                raise SchemaError(f"name must be a string, got {raw!r}")
            name = ACName.parse(raw)
        raw_value = data.get("value")
        value = None
        constructor = _CONSTRUCTORS.get(name)
        if constructor is not None:
            value = constructor()
            value.load(raw_value)
            value.validate()
        return cls(name, raw_value, value)

    @classmethod
    def from_json(cls, data):
        return cls.from_data(json.loads(data))


class Isolators(list):
    """An ordered list of isolators."""

    def get_by_name(self, name):
        """Return the last isolator called ``name``, or None."""
        return next((iso for iso in reversed(self) if iso.name == name), None)

    def unrecognized(self):
        """Return the isolators that have no registered value constructor."""
        return Isolators(iso for iso in self if iso.value is None)

    def to_data(self):
        return [iso.to_data() for iso in self]

    @classmethod
    def from_data(cls, data):
        if data is None:
            data = []
        if not isinstance(data, list):
            raise SchemaError("isolators must be a JSON array")
        return cls(Isolator.from_data(item) for item in data)

    @classmethod
    def from_json(cls, data):
        return cls.from_data(json.loads(data))