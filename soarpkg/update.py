"""Deciding which installed packages have updates available."""

from __future__ import annotations

from soarpkg.models import InstalledPackage, Package
from soarpkg.query import PackageFilter


def matches_filter(package: Package | None, package_filter: PackageFilter) -> bool:
    """Return whether ``package`` agrees with every field the filter sets."""
    if package is None:
        return False
    criteria = (
        (package_filter.pkg_name, package.pkg_name),
        (package_filter.repo_name, package.repo_name),
        (package_filter.collection, package.collection),
        (package_filter.family, package.family),
    )
    return all(wanted is None or wanted == actual for wanted, actual in criteria)


def needs_update(installed: InstalledPackage, available: Package) -> bool:
    """Return whether ``available`` differs from what is installed."""
    if installed.version != available.version:
        return True
    return installed.checksum != available.checksum