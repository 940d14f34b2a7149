"""Exception hierarchy used throughout soarpkg."""

from __future__ import annotations

import sqlite3


class SoarError(Exception):
    """Base class for every error raised by soarpkg."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def root_cause(self) -> str:
        """Describe the underlying I/O or database failure, if there is one."""
        cause = self.__cause__
        if isinstance(cause, (OSError, sqlite3.Error)):
            inner = cause.__cause__ if cause.__cause__ is not None else cause
            return f"Root cause: {inner}"
        return str(self)


class InvalidConfigError(SoarError):
    """The configuration file could not be read or is inconsistent."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message)


class ConfigAlreadyExistsError(SoarError):
    """A configuration file is already present where one would be written."""

    def __init__(self) -> None:
        super().__init__("Configuration file already exists")


class InvalidPackageQueryError(SoarError):
    """A package query string could not be parsed."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid package query: {detail}")
        self.detail = detail


class PackageNotFoundError(SoarError):
    """No package matched the request."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Package {name} not found")
        self.name = name


class InvalidChecksumError(SoarError):
    """A downloaded file did not match its expected checksum."""

    def __init__(self) -> None:
        super().__init__("Invalid checksum detected")


class InvalidPathError(SoarError):
    """A path that must exist, or be a directory, is not usable."""

    def __init__(self) -> None:
        super().__init__("Invalid path specified")


class FailedToFetchRemoteError(SoarError):
    """A remote resource answered with an unsuccessful status."""

    def __init__(self) -> None:
        super().__init__("Failed to fetch from remote source")


class PackageIntegrationError(SoarError):
    """Desktop integration of an installed package failed."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Package integration failed: {detail}")
        self.detail = detail


class DatabaseError(SoarError):
    """A database operation failed."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Database operation failed: {detail}")
        self.detail = detail