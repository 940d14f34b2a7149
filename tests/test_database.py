import sqlite3

import pytest

from soarpkg.database import Database, PackageRepository
from soarpkg.errors import SoarError
from soarpkg.models import RemotePackage, RemotePackageMetadata

SCHEMA = """
CREATE TABLE repository (name TEXT);
CREATE TABLE collections (id INTEGER PRIMARY KEY, name TEXT);
CREATE TABLE families (id INTEGER PRIMARY KEY, name TEXT);
CREATE TABLE icons (id INTEGER PRIMARY KEY, url TEXT);
CREATE TABLE packages (
    id INTEGER PRIMARY KEY, pkg, pkg_name, pkg_id, description, version,
    download_url, size, checksum, build_date, build_script, build_log,
    category, desktop, family_id, icon_id, collection_id
);
CREATE TABLE homepages (url, package_id);
CREATE TABLE notes (note, package_id);
CREATE TABLE source_urls (url, package_id);
CREATE TABLE provides (family_id, package_id);
"""


def make_remote(name, **overrides):
    values = dict(
        pkg=name,
        pkg_name=name,
        description=f"{name} description",
        note="",
        version="1.0",
        download_url=f"https://example.com/{name}",
        size="1 MB",
        bsum=f"sum-{name}",
        build_date="2024-01-01",
        src_url=f"https://example.com/src/{name}",
        homepage=f"https://example.com/home/{name}",
        build_script="script",
        build_log="log",
        category="Utility",
        provides="",
        icon="https://example.com/icon.png",
    )
    values.update(overrides)
    return RemotePackage(**values)


@pytest.fixture
def db(tmp_path):
    path = tmp_path / "metadata.db"
    conn = sqlite3.connect(path)
    conn.executescript(SCHEMA)
    conn.close()
    database = Database.open(path)
    yield database
    database.close()


def rows(database, sql):
    return database.conn.execute(sql).fetchall()


def test_import_inserts_packages_and_links(db):
    metadata = RemotePackageMetadata(
        collection={"bin": [make_remote("alpha"), make_remote("beta")]}
    )
    db.import_metadata(metadata, "main")

    names = [r[0] for r in rows(db, "SELECT pkg_name FROM packages ORDER BY id")]
    assert names == ["alpha", "beta"]
    assert rows(db, "SELECT name FROM repository") == [("main",)]
    assert rows(db, "SELECT name FROM collections") == [("bin",)]
    checksums = [r[0] for r in rows(db, "SELECT checksum FROM packages ORDER BY id")]
    assert checksums == ["sum-alpha", "sum-beta"]
    homepages = rows(db, "SELECT url FROM homepages ORDER BY package_id")
    assert homepages == [("https://example.com/home/alpha",), ("https://example.com/home/beta",)]


def test_icons_are_shared_and_families_created_per_package(db):
    metadata = RemotePackageMetadata(
        collection={"bin": [make_remote("alpha"), make_remote("beta", pkg_family="fam")]}
    )
    db.import_metadata(metadata, "main")

    assert len(rows(db, "SELECT id FROM icons")) == 1
    families = [r[0] for r in rows(db, "SELECT name FROM families ORDER BY id")]
    assert families == ["", "fam"]
    provides = rows(db, "SELECT family_id, package_id FROM provides ORDER BY package_id")
    package_families = rows(db, "SELECT family_id, id FROM packages ORDER BY id")
    assert provides == package_families


def test_repository_and_collection_are_reused(db):
    db.import_metadata(RemotePackageMetadata(collection={"bin": [make_remote("a")]}), "main")
    db.import_metadata(RemotePackageMetadata(collection={"bin": [make_remote("b")]}), "other")

    assert rows(db, "SELECT name FROM repository") == [("main",)]
    assert len(rows(db, "SELECT id FROM collections")) == 1
    collection_ids = {r[0] for r in rows(db, "SELECT collection_id FROM packages")}
    assert len(collection_ids) == 1


def test_failed_import_rolls_back(db):
    db.conn.execute("DROP TABLE notes")
    metadata = RemotePackageMetadata(collection={"bin": [make_remote("alpha")]})
    with pytest.raises(SoarError, match="SQLite database error"):
        db.import_metadata(metadata, "main")
    assert rows(db, "SELECT * FROM packages") == []
    assert rows(db, "SELECT * FROM repository") == []


def test_package_repository_direct_use(db):
    repo = PackageRepository(db.conn, "direct")
    repo.import_packages(RemotePackageMetadata(collection={"x": [make_remote("gamma")]}))
    assert rows(db, "SELECT pkg FROM packages") == [("gamma",)]


def test_open_multi_attaches_shards(tmp_path):
    paths = [tmp_path / f"db{i}.db" for i in range(3)]
    with Database.open_multi(paths) as database:
        names = [r[1] for r in database.conn.execute("PRAGMA database_list")]
    assert names == ["main", "shard1", "shard2"]


def test_open_multi_requires_paths():
    with pytest.raises(SoarError):
        Database.open_multi([])


def test_open_missing_directory_fails(tmp_path):
    with pytest.raises(SoarError, match="SQLite database error"):
        Database.open(tmp_path / "missing" / "x.db")