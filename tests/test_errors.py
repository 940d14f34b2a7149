import re
import sqlite3

import pytest

from soarpkg.errors import (
    ConfigAlreadyExistsError,
    DatabaseError,
    FailedToFetchRemoteError,
    InvalidChecksumError,
    InvalidConfigError,
    InvalidPackageQueryError,
    InvalidPathError,
    PackageIntegrationError,
    PackageNotFoundError,
    SoarError,
)


def _chained(error, cause):
    """Raise ``error`` from ``cause`` and hand back the caught error."""
    try:
        try:
            raise cause
        except Exception as exc:
            raise error from exc
    except SoarError as caught:
        return caught


@pytest.mark.parametrize(
    "error, text",
    [
        (InvalidConfigError(), "Invalid configuration"),
        (ConfigAlreadyExistsError(), "Configuration file already exists"),
        (InvalidChecksumError(), "Invalid checksum detected"),
        (InvalidPathError(), "Invalid path specified"),
        (FailedToFetchRemoteError(), "Failed to fetch from remote source"),
        (PackageNotFoundError("curl"), "Package curl not found"),
        (InvalidPackageQueryError("bad"), "Invalid package query: bad"),
        (PackageIntegrationError("no icon"), "Package integration failed: no icon"),
        (DatabaseError("locked"), "Database operation failed: locked"),
    ],
)
def test_messages(error, text):
    assert str(error) == text
    assert error.message == text


@pytest.mark.parametrize(
    "error, text",
    [
        (InvalidConfigError(), "Invalid configuration"),
        (ConfigAlreadyExistsError(), "Configuration file already exists"),
        (InvalidChecksumError(), "Invalid checksum detected"),
        (PackageNotFoundError("x"), "Package x not found"),
        (DatabaseError("x"), "Database operation failed: x"),
    ],
)
def test_all_errors_are_soar_errors(error, text):
    result = error.root_cause()
    assert result == text
    with pytest.raises(SoarError, match=re.escape(text)):
        raise error


def test_package_not_found_keeps_name():
    assert PackageNotFoundError("htop").name == "htop"


def test_root_cause_without_cause_is_message():
    error = InvalidChecksumError()
    assert error.root_cause() == str(error)


def test_root_cause_of_os_error():
    inner = FileNotFoundError(2, "No such file or directory")
    error = _chained(SoarError(f"IO error: {inner}"), inner)
    assert error.root_cause() == f"Root cause: {inner}"


def test_root_cause_of_sqlite_error():
    inner = sqlite3.OperationalError("database is locked")
    error = _chained(DatabaseError(str(inner)), inner)
    assert error.root_cause() == "Root cause: database is locked"


def test_root_cause_ignores_other_causes():
    error = _chained(InvalidConfigError(), ValueError("nope"))
    assert error.root_cause() == "Invalid configuration"