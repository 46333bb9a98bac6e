# acispec

Typed models and validation for App Container image manifests and the value
types they are built from.

The package checks a manifest when it is read and again when it is written.
If JSON data loads into an `ImageManifest`, the data is a valid image
manifest. If a manifest writes out as JSON, the output is valid too. Bad
input raises a `SchemaError` (from `acispec.errors`) or one of its
subclasses: `ACKindError`, `ACVersionError` or `ACNameError`. `SchemaError`
is a subclass of `ValueError`.

## Installation

```
pip install acispec
```

## Reading an image manifest

```python
from acispec.image import ImageManifest

manifest = ImageManifest.blank()
manifest.load_json('{"name": "example.com/test", "labels": [{"name": "os", "value": "linux"}]}')

print(manifest.name)                # example.com/test
print(manifest.get_label("os"))     # linux; None when the label is absent
print(manifest.to_json())
```

`ImageManifest.blank()` starts with `acKind` set to `ImageManifest` and
`acVersion` set to the specification version (`acispec.kind.VERSION`,
available as a `SemVer` in `acispec.kind.APP_CONTAINER_VERSION`). Fields that
the JSON leaves out keep their values. `load_json` checks the merged result
before it changes anything: if it raises, the manifest is left as it was.

`acispec.kind.Kind` reads only the `acVersion` and `acKind` fields of a
manifest, which is enough to tell what kind of manifest a document is.

## Value types

Each building block checks its own values:

- `acispec.names`: `ACName`, `ACKind` and `sanitize_acname`
- `acispec.versions`: `SemVer`
- `acispec.dates`: `Date` (RFC 3339)
- `acispec.urls`: `URL` (http and https only)
- `acispec.ids`: `UUID`, `Hash` and `short_hash`
- `acispec.labels`: `Label` and `Labels` (with checks on the `os` and `arch` labels)
- `acispec.annotations`: `Annotation` and `Annotations` (with checks on
  `created`, `homepage` and `documentation`)
- `acispec.environment`: `EnvironmentVariable` and `Environment`
- `acispec.command`: `Exec` and `EventHandler`
- `acispec.dependencies`: `Dependency`
- `acispec.mounts`: `MountPoint`, `Volume`, `Port`, `ExposedPort`,
  `mount_point_from_string` and `volume_from_string`
- `acispec.isolators`: resource isolators, Linux capability isolators and
  `add_isolator_value_constructor` for registering more
- `acispec.app`: `App`

```python
from acispec.names import ACName, sanitize_acname
from acispec.mounts import volume_from_string
from acispec.ids import Hash

ACName.parse("example.com/app-1.0.0")
sanitize_acname("Example.com/App_1")        # "example.com/app-1"
volume_from_string("data,kind=host,source=/srv,readOnly=true")
Hash.sha512(b"")                            # a sha512-<hex digest> hash
```

Most types have `to_json` and `from_json`; list and record types also have
`to_data` and `from_data`, which work on decoded JSON values.

## What this package does not do

There is no model of pod manifests: the package reads and writes image
manifests and the value types above only. It has no command-line tool and
does not read or build image archives.

## Running the tests

```
pip install -e .[test]
pytest
```