"""The manifest of an App Container Image."""

import json
from dataclasses import dataclass, field, fields, replace

from .annotations import Annotations
from .app import App
from .dependencies import Dependency
from .errors import SchemaError, invalid_ackind_error
from .kind import (
    APP_CONTAINER_VERSION,
    _dumps,
    _fold,
    _items,
    _parse_kind,
    _parse_name,
    _parse_version,
)
from .labels import Labels
from .names import ACKind, ACName
from .versions import SemVer

ACI_EXTENSION = ".aci"
IMAGE_MANIFEST_KIND = ACKind("ImageManifest")


def _kind_text(kind):
    kind.validate()
    return str(kind)


def _version_text(version):
    version._check()
    return str(version)


def _name_text(name):
    name.validate()
    return str(name)


def _path_whitelist(value):
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        raise SchemaError("pathWhitelist must be a JSON array of strings")
    return list(value)


@dataclass
class ImageManifest:
    """The contents and metadata of an image."""

    ac_kind: ACKind = ACKind("")
    ac_version: SemVer = field(default_factory=SemVer)
    name: ACName = ACName("")
    labels: Labels = field(default_factory=Labels)
    app: App | None = None
    annotations: Annotations = field(default_factory=Annotations)
    dependencies: list = field(default_factory=list)
    path_whitelist: list = field(default_factory=list)

    def __post_init__(self):
        self.ac_kind = ACKind(self.ac_kind)
        self.name = ACName(self.name)
        self.labels = Labels(self.labels or [])
        self.annotations = Annotations(self.annotations or [])
        self.dependencies = list(self.dependencies or [])
        self.path_whitelist = list(self.path_whitelist or [])

    @classmethod
    def blank(cls):
        """Return a manifest with only its kind and version set."""
        return cls(ac_kind=IMAGE_MANIFEST_KIND, ac_version=APP_CONTAINER_VERSION)

    def validate(self):
        """Check the manifest-wide requirements: kind, version and name."""
        if self.ac_kind != IMAGE_MANIFEST_KIND:
            raise invalid_ackind_error(IMAGE_MANIFEST_KIND)
        if self.ac_version.empty():
            raise SchemaError("acVersion must be set")
        if self.name.empty():
            raise SchemaError("name must be set")

    def get_label(self, name):
        return self.labels.get(name)

    def get_annotation(self, name):
        return self.annotations.get(name)

    def to_json(self):
        self.validate()
        data = {
            "acKind": _kind_text(self.ac_kind),
            "acVersion": _version_text(self.ac_version),
            "name": _name_text(self.name),
        }
        if self.labels:
            data["labels"] = self.labels.to_data()
        if self.app is not None:
            data["app"] = self.app.to_data()
        if self.annotations:
            data["annotations"] = self.annotations.to_data()
        if self.dependencies:
            data["dependencies"] = [dep.to_data() for dep in self.dependencies]
        if self.path_whitelist:
            data["pathWhitelist"] = list(self.path_whitelist)
        return _dumps(data)

    def load_json(self, data):
        """Merge the fields given in JSON ``data`` into this manifest.

        The merged manifest is validated first; on error this one is unchanged.
        """
        given = _fold(json.loads(data))
        changes = {}
        if "ackind" in given:
            changes["ac_kind"] = _parse_kind(given["ackind"])
        if "acversion" in given:
            changes["ac_version"] = _parse_version(given["acversion"])
        if "name" in given:
            changes["name"] = _parse_name(given["name"])
        if "labels" in given:
            changes["labels"] = Labels.from_data(given["labels"])
        if "app" in given:
            raw = given["app"]
            changes["app"] = None if raw is None else App.from_data(raw)
        if "annotations" in given:
            changes["annotations"] = Annotations.from_data(given["annotations"])
        if "dependencies" in given:
            changes["dependencies"] = _items(
                given["dependencies"], Dependency.from_data, "dependencies"
            )
        if "pathwhitelist" in given:
            changes["path_whitelist"] = _path_whitelist(given["pathwhitelist"])
        updated = replace(self, **changes)
        updated.validate()
        for item in fields(self):
            setattr(self, item.name, getattr(updated, item.name))
        return self