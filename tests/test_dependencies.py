import pytest

from acispec.dependencies import Dependency
from acispec.errors import SchemaError
from acispec.ids import Hash
from acispec.labels import Label, Labels
from acispec.names import ACName


def test_empty_hash():
    dependency = Dependency.from_json('{"app": "example.com/reduce-worker-base"}')
    assert dependency.image_id is None
    text = dependency.to_json()
    assert text == '{"app":"example.com/reduce-worker-base"}'
    again = Dependency.from_json(text)
    assert again == dependency


def test_full_round_trip():
    dependency = Dependency(
        ACName("example.com/base"),
        Hash("sha512", "abcdef"),
        Labels([Label(ACName("version"), "1.0")]),
    )
    text = dependency.to_json()
    assert text == (
        '{"app":"example.com/base","imageID":"sha512-abcdef",'
        '"labels":[{"name":"version","value":"1.0"}]}'
    )
    assert Dependency.from_json(text) == dependency


def test_empty_app():
    with pytest.raises(SchemaError, match="App cannot be empty"):
        Dependency().to_json()


def test_missing_app_on_load():
    with pytest.raises(SchemaError, match="App cannot be empty"):
        Dependency.from_json("{}")


def test_bad_image_id():
    with pytest.raises(SchemaError):
        Dependency.from_json('{"app":"a","imageID":"md5-abc"}')


def test_bad_labels():
    with pytest.raises(SchemaError):
        Dependency.from_json('{"app":"a","labels":[{"name":"os","value":"plan9"}]}')