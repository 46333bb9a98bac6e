"""Environment variables passed to an app."""

import json
import re
from dataclasses import dataclass

from .errors import SchemaError
from .names import _dumps, _JsonData, _object_list, _quote, _string_field

_ENV_NAME = re.compile(r"[A-Za-z_][A-Za-z_0-9]*")


@dataclass
class EnvironmentVariable:
    """A single environment variable."""

    name: str = ""
    value: str = ""

    def validate(self):
        if not self.name:
            raise SchemaError("environment variable name must not be empty")
        if not _ENV_NAME.fullmatch(self.name):
            raise SchemaError(
                f"environment variable does not have valid identifier {_quote(self.name)}"
            )


class Environment(_JsonData, list):
    """An ordered list of environment variables with unique names."""

    def validate(self):
        seen = set()
        for variable in self:
            variable.validate()
            if variable.name in seen:
                raise SchemaError(
                    f"duplicate environment variable of name {_quote(variable.name)}"
                )
            seen.add(variable.name)

    def get(self, name):
        """Return the value of the variable called ``name``, or None."""
        for variable in self:
            if variable.name == name:
                return variable.value
        return None

    def set(self, name, value):
        """Set a variable, replacing one of the same name if present."""
        new = EnvironmentVariable(name, value)
        for position, variable in enumerate(self):
            if variable.name == name:
                self[position] = new
                return
        self.append(new)

    def to_data(self):
        self.validate()
        return [{"name": v.name, "value": v.value} for v in self]

    @classmethod
    def from_data(cls, data):
        environment = cls(
            EnvironmentVariable(_string_field(item, "name"), _string_field(item, "value"))
            for item in _object_list(data, "environment", "environment variable")
        )
        environment.validate()
        return environment

    def to_json(self):
        return _dumps(self.to_data())

    @classmethod
    def from_json(cls, data):
        return cls.from_data(json.loads(data))