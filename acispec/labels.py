"""Labels that qualify an image, such as its os and arch."""

from dataclasses import dataclass

from .errors import SchemaError
from .names import ACName, _NamedValue, _NamedValues, _quote

VALID_OS_ARCH = {
    "linux": ("amd64", "i386", "aarch64", "armv7l", "armv7b"),
    "freebsd": ("amd64", "i386", "arm"),
    "darwin": ("x86_64", "i386"),
}


def _go_list(items):
    return "[" + " ".join(items) + "]"


@dataclass
class Label(_NamedValue):
    """A single named label value."""


class Labels(_NamedValues):
    """An ordered list of labels with unique names."""

    _item = Label
    _plural = "labels"
    _singular = "label"

    def _check_name(self, name):
        if name == "name":
            raise SchemaError('invalid label name: "name"')

    def validate(self):
        """Check names are unique and that os and arch are known values."""
        seen = self._seen()
        if "os" not in seen:
            return
        os_name = seen["os"]
        valid_archs = VALID_OS_ARCH.get(os_name)
        if valid_archs is None:
            raise SchemaError(
                f"bad os {_quote(os_name)} (must be one of: {_go_list(sorted(VALID_OS_ARCH))})"
            )
        if "arch" in seen and seen["arch"] not in valid_archs:
            raise SchemaError(
                f"bad arch {_quote(seen['arch'])} for {os_name} "
                f"(must be one of: {_go_list(valid_archs)})"
            )

    def get(self, name):
        """Return the value of the label called ``name``, or None."""
        return super().get(name)

    def to_map(self):
        return {label.name: label.value for label in self}

    @classmethod
    def from_map(cls, mapping):
        labels = cls(Label(ACName(name), value) for name, value in mapping.items())
        labels.validate()
        return labels

    def to_data(self):
        """Return the labels as a list of JSON objects."""
        return super().to_data()

    @classmethod
    def from_data(cls, data):
        """Build validated labels from a list of JSON objects."""
        return super().from_data(data)

    def to_json(self):
        return super().to_json()

    @classmethod
    def from_json(cls, data):
        return super().from_json(data)