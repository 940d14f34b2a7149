"""Repository metadata databases and the import of remote metadata into them."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Sequence
from dataclasses import dataclass

from soarpkg.errors import SoarError
from soarpkg.models import RemotePackage, RemotePackageMetadata

_REPO_INSERT = "INSERT INTO repository (name) VALUES (?1)"
_REPO_CHECK = "SELECT name FROM repository LIMIT 1"
_COLLECTION_INSERT = "INSERT INTO collections (name) VALUES (?1)"
_COLLECTION_CHECK = "SELECT id FROM collections WHERE name = ?1"
_FAMILY_INSERT = "INSERT INTO families (name) VALUES (?1)"
_HOMEPAGE_INSERT = "INSERT INTO homepages (url, package_id) VALUES (?1, ?2)"
_NOTE_INSERT = "INSERT INTO notes (note, package_id) VALUES (?1, ?2)"
_SOURCE_URL_INSERT = "INSERT INTO source_urls (url, package_id) VALUES (?1, ?2)"
_ICON_INSERT = "INSERT INTO icons (url) VALUES (?1)"
_ICON_CHECK = "SELECT id FROM icons WHERE url = ?1"
_PROVIDES_INSERT = "INSERT INTO provides (family_id, package_id) VALUES (?1, ?2)"
_PACKAGE_INSERT = """
    INSERT INTO packages (
        pkg, pkg_name, pkg_id, description, version, download_url, size,
        checksum, build_date, build_script, build_log, category,
        desktop, family_id, icon_id, collection_id
    ) VALUES (?1, ?2, ?3, ?4, ?5, ?6, ?7, ?8, ?9, ?10, ?11, ?12, ?13, ?14, ?15, ?16)
"""


def _db_error(exc: sqlite3.Error) -> SoarError:
    return SoarError(f"SQLite database error: {exc}")


@dataclass
class PackageRepository:
    """Writes the packages of a metadata document into an open database."""

    conn: sqlite3.Connection
    repo_name: str

    def import_packages(self, metadata: RemotePackageMetadata) -> None:
        """Insert every package of ``metadata``, grouped by collection."""
        try:
            self._get_or_create_repo(self.repo_name)
            for collection_name, packages in metadata.collection.items():
                collection_id = self._get_or_create_collection(collection_name)
                for package in packages:
                    self._insert_package(package, collection_id)
        except sqlite3.Error as exc:
            raise _db_error(exc) from exc

    def _get_or_create_repo(self, name: str) -> None:
        if self.conn.execute(_REPO_CHECK).fetchone() is None:
            self.conn.execute(_REPO_INSERT, (name,))

    def _get_or_create_collection(self, name: str) -> int:
        row = self.conn.execute(_COLLECTION_CHECK, (name,)).fetchone()
        if row is not None:
            return row[0]
        return self.conn.execute(_COLLECTION_INSERT, (name,)).lastrowid

    def _get_or_create_icon(self, url: str) -> int:
        row = self.conn.execute(_ICON_CHECK, (url,)).fetchone()
        if row is not None:
            return row[0]
        return self.conn.execute(_ICON_INSERT, (url,)).lastrowid

    def _insert_package(self, package: RemotePackage, collection_id: int) -> None:
        family_id = self.conn.execute(
            _FAMILY_INSERT, (package.pkg_family or "",)
        ).lastrowid
        icon_id = self._get_or_create_icon(package.icon)
        package_id = self.conn.execute(
            _PACKAGE_INSERT,
            (
                package.pkg,
                package.pkg_name,
                package.pkg_id,
                package.description,
                package.version,
                package.download_url,
                package.size,
                package.bsum,
                package.build_date,
                package.build_script,
                package.build_log,
                package.category,
                package.desktop,
                family_id,
                icon_id,
                collection_id,
            ),
        ).lastrowid
        self.conn.execute(_HOMEPAGE_INSERT, (package.homepage, package_id))
        self.conn.execute(_NOTE_INSERT, (package.note, package_id))
        self.conn.execute(_SOURCE_URL_INSERT, (package.src_url, package_id))
        self.conn.execute(_PROVIDES_INSERT, (family_id, package_id))


class Database:
    """An SQLite connection to one database, or to several attached as shards."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    @classmethod
    def open(cls, path: str | os.PathLike) -> Database:
        """Open the database file at ``path``."""
        try:
            conn = sqlite3.connect(os.fspath(path))
        except sqlite3.Error as exc:
            raise _db_error(exc) from exc
        return cls(conn)

    @classmethod
    def open_multi(cls, paths: Sequence[str | os.PathLike]) -> Database:
        """Open the first database and attach the others as ``shard1``, ``shard2``..."""
        if not paths:
            raise SoarError("No database paths given")
        database = cls.open(paths[0])
        try:
            for idx, path in enumerate(paths[1:], start=1):
                database.conn.execute(
                    f"ATTACH DATABASE ? AS shard{idx}", (os.fspath(path),)
                )
        except sqlite3.Error as exc:
            database.close()
            raise _db_error(exc) from exc
        return database

    def import_metadata(self, metadata: RemotePackageMetadata, repo_name: str) -> None:
        """Import ``metadata`` for ``repo_name`` in a single transaction."""
        try:
            self.conn.execute("PRAGMA journal_mode = WAL").fetchone()
            with self.conn:
                PackageRepository(self.conn, repo_name).import_packages(metadata)
        except sqlite3.Error as exc:
            raise _db_error(exc) from exc

    def close(self) -> None:
        """Close the connection."""
        self.conn.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()