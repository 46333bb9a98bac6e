"""The description of how to run an app."""

import json
import posixpath
from dataclasses import dataclass, field

from .command import EventHandler, Exec
from .environment import Environment
from .errors import SchemaError
from .isolators import Isolators
from .mounts import MountPoint, Port


def _fold(data):
    """Map lower-cased keys to values; later keys win, as field names match case-insensitively."""
    return {key.lower(): value for key, value in data.items()}


def _string(fields, key):
    value = fields.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SchemaError(f"{key} must be a string, got {value!r}")
    return value


def _items(fields, key, parse):
    value = fields.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise SchemaError(f"{key} must be a JSON array")
    return [parse(item) for item in value]


def _exec(value):
    if value is None:
        value = []
    if not isinstance(value, list) or not all(isinstance(arg, str) for arg in value):
        raise SchemaError("exec must be a JSON array of strings")
    command = Exec(value)
    command.validate()
    return command


@dataclass
class App:
    """How to run an app: its command, identity, environment and limits."""

    exec: Exec = field(default_factory=Exec)
    event_handlers: list = field(default_factory=list)
    user: str = ""
    group: str = ""
    working_directory: str = ""
    environment: Environment = field(default_factory=Environment)
    mount_points: list = field(default_factory=list)
    ports: list = field(default_factory=list)
    isolators: Isolators = field(default_factory=Isolators)

    def __post_init__(self):
        self.exec = Exec(self.exec or [])
        self.event_handlers = list(self.event_handlers or [])
        self.environment = Environment(self.environment or [])
        self.mount_points = list(self.mount_points or [])
        self.ports = list(self.ports or [])
        self.isolators = Isolators(self.isolators or [])

    def validate(self):
        self.exec.validate()
        if not self.user:
            raise SchemaError("User is required")
        if not self.group:
            raise SchemaError("Group is required")
        if self.working_directory and not posixpath.isabs(self.working_directory):
            raise SchemaError("WorkingDirectory must be an absolute path")
        seen = set()
        for handler in self.event_handlers:
            if handler.name in seen:
                raise SchemaError(
                    f"Only one eventHandler of name {json.dumps(handler.name)} allowed"
                )
            seen.add(handler.name)
        self.environment.validate()

    def to_data(self):
        self.validate()
        data = {"exec": list(self.exec)}
        if self.event_handlers:
            data["eventHandlers"] = [handler.to_data() for handler in self.event_handlers]
        data["user"] = self.user
        data["group"] = self.group
        if self.working_directory:
            data["workingDirectory"] = self.working_directory
        if self.environment:
            data["environment"] = self.environment.to_data()
        if self.mount_points:
            data["mountPoints"] = [mount.to_data() for mount in self.mount_points]
        if self.ports:
            data["ports"] = [port.to_data() for port in self.ports]
        if self.isolators:
            data["isolators"] = self.isolators.to_data()
        return data

    @classmethod
    def from_data(cls, data):
        if not isinstance(data, dict):
            raise SchemaError("app must be a JSON object")
        fields = _fold(data)
        app = cls(
            exec=_exec(fields["exec"]) if "exec" in fields else Exec(),
            event_handlers=_items(fields, "eventhandlers", EventHandler.from_data),
            user=_string(fields, "user"),
            group=_string(fields, "group"),
            working_directory=_string(fields, "workingdirectory"),
            environment=Environment.from_data(fields.get("environment")),
            mount_points=_items(fields, "mountpoints", MountPoint.from_data),
            ports=_items(fields, "ports", Port.from_data),
            isolators=Isolators.from_data(fields.get("isolators")),
        )
        app.validate()
        return app

    def to_json(self):
        return json.dumps(self.to_data(), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_json(cls, data):
        return cls.from_data(json.loads(data))