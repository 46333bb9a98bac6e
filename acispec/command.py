"""The command line of an app and the handlers run around it."""

import json
import posixpath
from dataclasses import dataclass, field

from .errors import SchemaError
from .names import _dumps, _JsonData, _optional_string, _quote

_HANDLER_NAMES = ("pre-start", "post-stop")


class Exec(list):
    """An app's command line; the first element must be an absolute path."""

    def validate(self):
        if not self:
            raise SchemaError("Exec cannot be empty")
        if not posixpath.isabs(self[0]):
            raise SchemaError("Exec[0] must be absolute path")

    def to_json(self):
        self.validate()
        return _dumps(list(self))

    @classmethod
    def from_json(cls, data):
        return _exec_from_data(json.loads(data))


def _exec_from_data(data):
    if data is None:
        data = []
    if not isinstance(data, list) or not all(isinstance(arg, str) for arg in data):
        raise SchemaError("exec must be a JSON array of strings")
    command = Exec(data)
    command.validate()
    return command


@dataclass
class EventHandler(_JsonData):
    """A command run on an app lifecycle event."""

    name: str = ""
    exec: Exec = field(default_factory=Exec)

    def __post_init__(self):
        self.exec = Exec(self.exec)

    def validate(self):
        if self.name in _HANDLER_NAMES:
            return
        if not self.name:
            raise SchemaError('eventHandler "name" cannot be empty')
        raise SchemaError(f'bad eventHandler "name": {_quote(self.name)}')

    def to_data(self):
        self.validate()
        self.exec.validate()
        return {"name": self.name, "exec": list(self.exec)}

    @classmethod
    def from_data(cls, data):
        if not isinstance(data, dict):
            raise SchemaError("eventHandler must be a JSON object")
        handler = cls(_optional_string(data.get("name"), "name"))
        if "exec" in data:
            handler.exec = _exec_from_data(data["exec"])
        handler.validate()
        return handler

    def to_json(self):
        return _dumps(self.to_data())

    @classmethod
    def from_json(cls, data):
        return cls.from_data(json.loads(data))