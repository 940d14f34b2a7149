import pytest

from soarpkg.models import InstalledPackage, Package
from soarpkg.query import PackageFilter
from soarpkg.update import matches_filter, needs_update


def make_package(**overrides):
    values = dict(
        id=1,
        repo_name="main",
        collection="bin",
        pkg="tool",
        pkg_id="tool",
        pkg_name="tool",
        family="fam",
        description="",
        version="1.0",
        size="1 MB",
        checksum="abc",
        note="",
        download_url="",
        build_date="",
        build_script="",
        build_log="",
        homepage="",
        category="",
        source_url="",
    )
    values.update(overrides)
    return Package(**values)


def make_installed(**overrides):
    values = dict(
        id=1,
        repo_name="main",
        collection="bin",
        family="fam",
        pkg_name="tool",
        pkg="tool",
        description="",
        version="1.0",
        size="1 MB",
        checksum="abc",
        build_date="",
        build_script="",
        build_log="",
        category="",
        installed_path="/tmp/tool",
    )
    values.update(overrides)
    return InstalledPackage(**values)


def test_none_package_never_matches():
    assert matches_filter(None, PackageFilter()) is False


def test_empty_filter_matches_any_package():
    assert matches_filter(make_package(), PackageFilter()) is True


def test_full_filter_matches():
    f = PackageFilter(pkg_name="tool", repo_name="main", collection="bin", family="fam")
    assert matches_filter(make_package(), f) is True


@pytest.mark.parametrize(
    "field, value",
    [("pkg_name", "other"), ("repo_name", "other"), ("collection", "other"), ("family", "other")],
)
def test_any_mismatch_rejects(field, value):
    assert matches_filter(make_package(), PackageFilter(**{field: value})) is False


def test_exact_pkg_name_is_not_considered():
    assert matches_filter(make_package(), PackageFilter(exact_pkg_name="other")) is True


def test_same_version_and_checksum_needs_no_update():
    assert needs_update(make_installed(), make_package()) is False


def test_version_change_needs_update():
    assert needs_update(make_installed(), make_package(version="2.0")) is True


def test_checksum_change_needs_update():
    assert needs_update(make_installed(), make_package(checksum="def")) is True