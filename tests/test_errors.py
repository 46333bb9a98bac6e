import pytest

from acispec.errors import (
    ACKindError,
    ACNameError,
    ACVersionError,
    SchemaError,
    invalid_ackind_error,
)


def test_invalid_ackind_error_message():
    err = invalid_ackind_error("PodManifest")
    assert isinstance(err, ACKindError)
    assert str(err) == 'missing or bad ACKind (must be "PodManifest")'


def test_invalid_ackind_error_can_be_raised_and_caught_as_schema_error():
    err = invalid_ackind_error("ImageManifest")
    assert str(err) == 'missing or bad ACKind (must be "ImageManifest")'
    with pytest.raises(SchemaError) as info:
        raise err
    assert info.value is err


@pytest.mark.parametrize("cls", [ACKindError, ACVersionError, ACNameError])
def test_errors_keep_message_and_are_value_errors(cls):
    err = cls("SemVer is bad")
    assert str(err) == "SemVer is bad"
    with pytest.raises(ValueError, match="^SemVer is bad$"):
        raise err