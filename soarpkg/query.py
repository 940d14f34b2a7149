"""Parsing of package query strings and the filters built from them."""

from __future__ import annotations

import re
from dataclasses import dataclass

from soarpkg.errors import InvalidPackageQueryError

_PACKAGE_RE = re.compile(
    r"""
    (?:(?P<family>[^/\#@:]+)/)?      # optional family followed by /
    (?P<name>[^/\#@:]+)              # required package name
    (?:\#(?P<collection>[^@:]+))?    # optional collection after #
    (?:@(?P<version>[^:]+))?         # optional version after @
    (?::(?P<repo>[^:]+))?            # optional repo after :
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class PackageQuery:
    """A parsed ``family/name#collection@version:repo`` query."""

    name: str
    repo_name: str | None = None
    collection: str | None = None
    family: str | None = None
    version: str | None = None

    @classmethod
    def parse(cls, value: str) -> PackageQuery:
        """Parse a query string; matching is case-insensitive."""
        query = value.strip().lower()
        if not query:
            raise InvalidPackageQueryError("Package query can't be empty")
        match = _PACKAGE_RE.fullmatch(query)
        if match is None:
            raise InvalidPackageQueryError("Invalid package query format")
        name = match.group("name")
        if not name:
            raise InvalidPackageQueryError("Package name cannot be empty")
        return cls(
            name=name,
            repo_name=match.group("repo"),
            collection=match.group("collection"),
            family=match.group("family"),
            version=match.group("version"),
        )


@dataclass
class PackageFilter:
    """Criteria used to select packages from a database."""

    repo_name: str | None = None
    collection: str | None = None
    exact_pkg_name: str | None = None
    pkg_name: str | None = None
    family: str | None = None
    exact_case: bool = False

    @classmethod
    def from_query(cls, query: PackageQuery) -> PackageFilter:
        """Build a filter selecting exactly what ``query`` names."""
        return cls(
            repo_name=query.repo_name,
            collection=query.collection,
            exact_pkg_name=query.name,
            family=query.family,
        )