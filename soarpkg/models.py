"""Records describing available, installed and remote packages."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from typing import Any

from soarpkg.errors import SoarError


@dataclass(kw_only=True)
class Package:
    """A package available in a repository database."""

    id: int
    repo_name: str
    collection: str
    pkg: str
    pkg_id: str
    pkg_name: str
    app_id: str | None = None
    family: str
    description: str
    version: str
    size: str
    checksum: str
    note: str
    download_url: str
    build_date: str
    build_script: str
    build_log: str
    homepage: str
    category: str
    source_url: str
    icon: str | None = None
    desktop: str | None = None


@dataclass(kw_only=True)
class InstalledPackage:
    """A package recorded in the local installation database."""

    id: int
    repo_name: str
    collection: str
    family: str
    pkg_name: str
    pkg: str
    pkg_id: str | None = None
    app_id: str | None = None
    description: str
    version: str
    size: str
    checksum: str
    build_date: str
    build_script: str
    build_log: str
    category: str
    bin_path: str | None = None
    installed_path: str
    installed_date: str | None = None
    disabled: bool = False
    pinned: bool = False
    is_installed: bool = False
    installed_with_family: bool = False


@dataclass(kw_only=True)
class RemotePackage:
    """One package entry of a repository's remote metadata document."""

    pkg: str
    pkg_name: str
    description: str
    note: str
    version: str
    download_url: str
    size: str
    bsum: str
    build_date: str
    src_url: str
    homepage: str
    build_script: str
    build_log: str
    category: str
    provides: str
    icon: str
    desktop: str | None = None
    pkg_id: str | None = None
    pkg_family: str | None = None
    app_id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RemotePackage:
        """Build a package from a decoded JSON object; unknown keys are ignored."""
        if not isinstance(data, Mapping):
            raise SoarError("Invalid metadata: package entry is not an object")
        values: dict[str, str | None] = {}
        for spec in fields(cls):
            optional = spec.default is None
            if spec.name not in data:
                if optional:
                    values[spec.name] = None
                    continue
                raise SoarError(f"Invalid metadata: missing field `{spec.name}`")
            value = data[spec.name]
            if value is None and optional:
                values[spec.name] = None
            elif isinstance(value, str):
                values[spec.name] = value
            else:
                raise SoarError(
                    f"Invalid metadata: field `{spec.name}` must be a string"
                )
        return cls(**values)

    def to_dict(self) -> dict[str, str | None]:
        """Return the package as a JSON-ready dictionary."""
        return asdict(self)


@dataclass
class RemotePackageMetadata:
    """A remote metadata document: package lists keyed by collection name."""

    collection: dict[str, list[RemotePackage]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RemotePackageMetadata:
        """Build metadata from a decoded JSON object."""
        if not isinstance(data, Mapping):
            raise SoarError("Invalid metadata: document is not an object")
        collection: dict[str, list[RemotePackage]] = {}
        for name, entries in data.items():
            if not isinstance(entries, list):
                raise SoarError(f"Invalid metadata: collection `{name}` is not a list")
            collection[name] = [RemotePackage.from_dict(entry) for entry in entries]
        return cls(collection=collection)