"""Images that an image depends on."""

import json
from dataclasses import dataclass, field

from .errors import SchemaError
from .ids import Hash
from .labels import Labels
from .names import ACName, _dumps, _JsonData, _optional_string


@dataclass
class Dependency(_JsonData):
    """A dependency on another image, by name and optionally id and labels."""

    app: ACName = ACName("")
    image_id: Hash | None = None
    labels: Labels = field(default_factory=Labels)

    def __post_init__(self):
        self.app = ACName(self.app)
        self.labels = Labels(self.labels)

    def validate(self):
        if len(self.app) < 1:
            raise SchemaError("App cannot be empty")

    def to_data(self):
        self.validate()
        self.app.validate()
        data = {"app": str(self.app)}
        if self.image_id is not None:
            self.image_id.validate()
            data["imageID"] = str(self.image_id)
        if self.labels:
            data["labels"] = self.labels.to_data()
        return data

    @classmethod
    def from_data(cls, data):
        if not isinstance(data, dict):
            raise SchemaError("dependency must be a JSON object")
        dependency = cls()
        if "app" in data:
            dependency.app = ACName.parse(_optional_string(data["app"], "app"))
        image_id = data.get("imageID")
        if image_id is not None:
            dependency.image_id = Hash.parse(_optional_string(image_id, "imageID"))
        if "labels" in data:
            dependency.labels = Labels.from_data(data["labels"])
        dependency.validate()
        return dependency

    def to_json(self):
        return _dumps(self.to_data())

    @classmethod
    def from_json(cls, data):
        return cls.from_data(json.loads(data))