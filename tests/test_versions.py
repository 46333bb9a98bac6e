import pytest

from acispec.errors import ACVersionError
from acispec.versions import BAD_SEMVER, ZERO_SEMVER, SemVer


@pytest.mark.parametrize(
    "version, expected",
    [
        (SemVer(major=1), '"1.0.0"'),
        (SemVer(major=3, minor=2, patch=1), '"3.2.1"'),
        (SemVer(major=3, minor=2, patch=1, prerelease="foo"), '"3.2.1-foo"'),
        (
            SemVer(major=1, minor=2, patch=3, prerelease="alpha", metadata="git"),
            '"1.2.3-alpha+git"',
        ),
    ],
)
def test_marshal_semver(version, expected):
    assert version.to_json() == expected


@pytest.mark.parametrize(
    "data, expected",
    [
        ('"1.0.0"', SemVer(major=1)),
        ('"3.2.1"', SemVer(major=3, minor=2, patch=1)),
        ('"3.2.1-foo"', SemVer(major=3, minor=2, patch=1, prerelease="foo")),
        (
            '"1.2.3-alpha+git"',
            SemVer(major=1, minor=2, patch=3, prerelease="alpha", metadata="git"),
        ),
    ],
)
def test_unmarshal_semver(data, expected):
    assert SemVer.from_json(data) == expected


@pytest.mark.parametrize("data", ['"1"', '"1.2.3.4"', "1.2.3", '"v1.2.3"'])
def test_unmarshal_semver_bad(data):
    with pytest.raises(ValueError):
        SemVer.from_json(data)


def test_parse_bad_message():
    with pytest.raises(ACVersionError) as info:
        SemVer.parse("v1.2.3")
    assert str(info.value) == BAD_SEMVER


def test_zero_version_is_rejected():
    assert SemVer().empty()
    with pytest.raises(ACVersionError) as info:
        SemVer().to_json()
    assert str(info.value) == ZERO_SEMVER
    with pytest.raises(ACVersionError) as info:
        SemVer.parse("0.0.0")
    assert str(info.value) == ZERO_SEMVER


def test_round_trip():
    version = SemVer.parse("0.5.1+git")
    assert version == SemVer(minor=5, patch=1, metadata="git")
    assert SemVer.from_json(version.to_json()) == version