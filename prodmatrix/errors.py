"""Error hierarchy shared by the registry, the catalog loader and the CLI."""

from __future__ import annotations


class ProductMatrixError(Exception):
    """Base class for every error raised by prodmatrix."""


class ConfigurationError(ProductMatrixError):
    """Raised when a product declaration or catalog file is invalid.

    ``issues`` carries the individual problems when several were found at
    once (e.g. by the catalog validator).
    """

    def __init__(self, message: str, issues: list[str] | None = None):
        super().__init__(message)
        self.issues = list(issues or [])


class NotFoundError(ProductMatrixError, KeyError):
    """Raised when a product key is not registered."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown product: {self.key}"


class MalformedVersionError(ProductMatrixError, ValueError):
    """Raised when a version string cannot be parsed."""

    def __init__(self, version: object):
        super().__init__(version)
        self.version = version

    def __str__(self) -> str:
        return f"Malformed version: {self.version!r}"
