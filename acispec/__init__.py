"""Schema types and validation for App Container image manifests."""

__version__ = "0.5.1"