"""Removal of installed packages."""

from __future__ import annotations

import os
import shutil
import sqlite3
from dataclasses import dataclass

from soarpkg.errors import SoarError
from soarpkg.models import InstalledPackage

_DELETE_INSTALLED = "DELETE FROM packages WHERE id = ? AND is_installed = true"


@dataclass
class PackageRemover:
    """Removes an installed package's files and its database record."""

    package: InstalledPackage
    db: sqlite3.Connection

    def remove(self) -> None:
        """Delete the binary symlink, the install directory and the record."""
        if self.package.bin_path is None:
            raise SoarError(f"Package {self.package.pkg_name} has no binary path")
        try:
            os.remove(self.package.bin_path)
            shutil.rmtree(self.package.installed_path)
        except OSError as exc:
            raise SoarError(f"IO error: {exc}") from exc
        try:
            with self.db:
                self.db.execute(_DELETE_INSTALLED, (self.package.id,))
        except sqlite3.Error as exc:
            raise SoarError(f"SQLite database error: {exc}") from exc