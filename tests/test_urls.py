from urllib.parse import urlsplit

import pytest

from acispec.errors import SchemaError
from acispec.urls import URL


def raw_url(text):
    return URL(*urlsplit(text))


@pytest.mark.parametrize(
    "text, expected",
    [
        ("http://foo.com", '"http://foo.com"'),
        ("http://foo.com/huh/what?is=this", '"http://foo.com/huh/what?is=this"'),
        ("https://example.com/bar", '"https://example.com/bar"'),
    ],
)
def test_marshal_url(text, expected):
    assert raw_url(text).to_json() == expected


@pytest.mark.parametrize("text", ["ftp://foo.com", "unix:///hello"])
def test_marshal_url_bad(text):
    with pytest.raises(SchemaError, match="scheme"):
        raw_url(text).to_json()


@pytest.mark.parametrize(
    "data, text",
    [
        ('"http://foo.com"', "http://foo.com"),
        ('"http://yis.com/hello?goodbye=yes"', "http://yis.com/hello?goodbye=yes"),
        ('"https://ohai.net"', "https://ohai.net"),
    ],
)
def test_unmarshal_url(data, text):
    assert URL.from_json(data) == raw_url(text)


@pytest.mark.parametrize(
    "data",
    [
        "badjson",
        "http://google.com",
        '"ftp://example.com"',
        '"unix://file.net"',
        '"not a url"',
    ],
)
def test_unmarshal_url_bad(data):
    with pytest.raises(ValueError):
        URL.from_json(data)


def test_parse_keeps_parts():
    url = URL.parse("https://example.com/docs?page=2#top")
    assert url.netloc == "example.com"
    assert url.path == "/docs"
    assert str(url) == "https://example.com/docs?page=2#top"