"""Exceptions raised when manifest data does not satisfy the App Container schema."""


class SchemaError(ValueError):
    """A value does not satisfy the App Container schema."""


class ACKindError(SchemaError):
    """The wrong or no ACKind is set in a manifest."""


class ACVersionError(SchemaError):
    """A bad ACVersion is set in a manifest."""


class ACNameError(SchemaError):
    """A bad value is used for an ACName."""


def invalid_ackind_error(kind):
    """Return the error for a manifest whose kind should have been ``kind``."""
    return ACKindError(f'missing or bad ACKind (must be "{kind}")')