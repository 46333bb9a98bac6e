import json

import pytest

from acispec.errors import SchemaError
from acispec.labels import Label, Labels
from acispec.names import ACName

GOOD = [
    '[{"name": "os", "value": "linux"}, {"name": "arch", "value": "amd64"}]',
    '[{"name": "os", "value": "linux"}, {"name": "arch", "value": "aarch64"}]',
    '[{"name": "os", "value": "linux"}, {"name": "arch", "value": "armv7l"}]',
    '[{"name": "os", "value": "linux"}, {"name": "arch", "value": "armv7b"}]',
    '[{"name": "os", "value": "freebsd"}, {"name": "arch", "value": "amd64"}]',
    "[]",
]

BAD = [
    (
        '[{"name": "os", "value": "OS/360"}, {"name": "arch", "value": "S/360"}]',
        'bad os "OS/360"',
    ),
    (
        '[{"name": "os", "value": "freebsd"}, {"name": "arch", "value": "armv7b"}]',
        'bad arch "armv7b" for freebsd',
    ),
    (
        '[{"name": "os", "value": "linux"}, {"name": "arch", "value": "arm"}]',
        'bad arch "arm" for linux',
    ),
    ('[{"name": "name"}]', 'invalid label name: "name"'),
    (
        '[{"name": "os", "value": "linux"}, {"name": "os", "value": "freebsd"}]',
        'duplicate labels of name "os"',
    ),
    (
        '[{"name": "arch", "value": "amd64"}, {"name": "os", "value": "freebsd"}, '
        '{"name": "arch", "value": "x86_64"}]',
        'duplicate labels of name "arch"',
    ),
]


@pytest.mark.parametrize("text", GOOD)
def test_labels_good(text):
    assert Labels.from_json(text).to_data() == json.loads(text)


@pytest.mark.parametrize("text, prefix", BAD)
def test_labels_bad(text, prefix):
    with pytest.raises(SchemaError) as info:
        Labels.from_json(text)
    assert str(info.value).startswith(prefix)


def test_bad_os_lists_choices():
    with pytest.raises(SchemaError) as info:
        Labels([Label(ACName("os"), "plan9")]).validate()
    assert str(info.value) == 'bad os "plan9" (must be one of: [darwin freebsd linux])'


def test_get():
    labels = Labels([Label(ACName("os"), "linux"), Label(ACName("version"), "1.0")])
    assert labels.get("version") == "1.0"
    assert labels.get("arch") is None


def test_map_round_trip():
    mapping = {ACName("os"): "darwin", ACName("arch"): "x86_64"}
    labels = Labels.from_map(mapping)
    assert labels.to_map() == mapping


def test_from_map_invalid():
    with pytest.raises(SchemaError):
        Labels.from_map({"os": "darwin", "arch": "armv7l"})


def test_to_json():
    labels = Labels([Label(ACName("os"), "linux")])
    assert labels.to_json() == '[{"name":"os","value":"linux"}]'