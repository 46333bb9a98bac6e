"""Free-form annotations attached to images, pods and apps."""

from dataclasses import dataclass

from .dates import Date
from .names import ACName, _NamedValue, _NamedValues
from .urls import URL


@dataclass
class Annotation(_NamedValue):
    """A single named annotation value."""


class Annotations(_NamedValues):
    """An ordered list of annotations whose names are unique."""

    _item = Annotation
    _plural = "annotations"
    _singular = "annotation"

    def validate(self):
        """Check names are unique and well-known annotations are well formed."""
        seen = self._seen()
        if "created" in seen:
            Date.parse(seen["created"])
        for key in ("homepage", "documentation"):
            if key in seen:
                URL.parse(seen[key])

    def get(self, name):
        """Return the value of the annotation called ``name``, or None."""
        return super().get(name)

    def set(self, name, value):
        """Set an annotation, replacing one of the same name if present."""
        new = Annotation(ACName(name), value)
        for position, anno in enumerate(self):
            if anno.name.equals(name):
                self[position] = new
                return
        self.append(new)

    def to_data(self):
        """Return the annotations as a list of JSON objects."""
        return super().to_data()

    @classmethod
    def from_data(cls, data):
        """Build validated annotations from a list of JSON objects."""
        return super().from_data(data)

    def to_json(self):
        return super().to_json()

    @classmethod
    def from_json(cls, data):
        return super().from_json(data)