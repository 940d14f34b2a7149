"""Loading, defaulting and writing of the application configuration."""

from __future__ import annotations

import functools
import os
import platform
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from soarpkg.errors import ConfigAlreadyExistsError, InvalidConfigError, SoarError
from soarpkg.utils import home_config_path, home_data_path

ARCH = platform.machine()
DEFAULT_REPOSITORY_NAME = "pkgforge"
DEFAULT_REPOSITORY_URL = f"https://bin.pkgforge.dev/{ARCH}"
DEFAULT_REPOSITORY_METADATA = "METADATA.AIO.json"
DEFAULT_PARALLEL_LIMIT = 4
DEFAULT_SEARCH_LIMIT = 20

_U32_MAX = 2**32 - 1
_OPTIONAL_PATHS = (
    "soar_cache",
    "soar_bin",
    "soar_db",
    "soar_repositories",
    "soar_packages",
)


@dataclass
class Repository:
    """A remote repository that packages are fetched from."""

    name: str
    url: str
    metadata: str | None = None

    def local_path(self) -> Path:
        """Return the directory holding this repository's local data."""
        from soarpkg.paths import repositories_path

        return repositories_path() / self.name

    def to_dict(self) -> dict[str, str]:
        data = {"name": self.name, "url": self.url}
        if self.metadata is not None:
            data["metadata"] = self.metadata
        return data


@dataclass(kw_only=True)
class Config:
    """Application configuration."""

    soar_root: str
    soar_cache: str | None = None
    soar_bin: str | None = None
    soar_db: str | None = None
    soar_repositories: str | None = None
    soar_packages: str | None = None
    repositories: list[Repository] = field(default_factory=list)
    parallel: bool | None = None
    parallel_limit: int | None = None
    search_limit: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a TOML-ready dictionary, omitting unset values."""
        data: dict[str, Any] = {"soar_root": self.soar_root}
        for name in ("soar_cache", "soar_bin", "soar_db", "soar_repositories", "soar_packages"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        data["repositories"] = [repo.to_dict() for repo in self.repositories]
        for name in ("parallel", "parallel_limit", "search_limit"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data


def default_config() -> Config:
    """Return the built-in configuration."""
    soar_root = os.environ.get("SOAR_ROOT") or f"{home_data_path()}/soar"
    return Config(
        soar_root=soar_root,
        soar_bin=f"{soar_root}/bin",
        soar_cache=f"{soar_root}/cache",
        soar_db=f"{soar_root}/db",
        soar_packages=f"{soar_root}/packages",
        soar_repositories=f"{soar_root}/repos",
        repositories=[
            Repository(
                name=DEFAULT_REPOSITORY_NAME,
                url=DEFAULT_REPOSITORY_URL,
                metadata=DEFAULT_REPOSITORY_METADATA,
            )
        ],
        parallel=True,
        parallel_limit=DEFAULT_PARALLEL_LIMIT,
        search_limit=DEFAULT_SEARCH_LIMIT,
    )


def _config_file() -> Path:
    return Path(home_config_path()) / "soar" / "config.toml"


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidConfigError()
    return value


def _optional_int(data: dict[str, Any], key: str, maximum: int | None) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidConfigError()
    if maximum is not None and value > maximum:
        raise InvalidConfigError()
    return value


def _repository_from_dict(data: Any) -> Repository:
    if not isinstance(data, dict):
        raise InvalidConfigError()
    name = data.get("name")
    url = data.get("url")
    if not isinstance(name, str) or not isinstance(url, str):
        raise InvalidConfigError()
    return Repository(name=name, url=url, metadata=_optional_str(data, "metadata"))


def _config_from_dict(data: dict[str, Any]) -> Config:
    soar_root = data.get("soar_root")
    if not isinstance(soar_root, str):
        raise InvalidConfigError()
    repositories = data.get("repositories")
    if not isinstance(repositories, list):
        raise InvalidConfigError()
    parallel = data.get("parallel")
    if parallel is not None and not isinstance(parallel, bool):
        raise InvalidConfigError()
    return Config(
        soar_root=soar_root,
        **{name: _optional_str(data, name) for name in _OPTIONAL_PATHS},
        repositories=[_repository_from_dict(repo) for repo in repositories],
        parallel=parallel,
        parallel_limit=_optional_int(data, "parallel_limit", _U32_MAX),
        search_limit=_optional_int(data, "search_limit", None),
    )


def _resolve(env_name: str, configured: str | None, fallback: str) -> str:
    value = os.environ.get(env_name)
    if value is not None:
        return value
    return configured if configured is not None else fallback


def load_config() -> Config:
    """Read the configuration file, falling back to the defaults when it is absent."""
    path = _config_file()
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        config = default_config()
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidConfigError() from exc
    else:
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise InvalidConfigError() from exc
        config = _config_from_dict(data)

    root = os.environ.get("SOAR_ROOT", config.soar_root)
    config.soar_root = root
    config.soar_bin = _resolve("SOAR_BIN", config.soar_bin, f"{root}/bin")
    config.soar_cache = _resolve("SOAR_CACHE", config.soar_cache, f"{root}/cache")
    config.soar_db = _resolve("SOAR_DB", config.soar_db, f"{root}/db")
    config.soar_packages = _resolve("SOAR_PACKAGE", config.soar_packages, f"{root}/packages")
    config.soar_repositories = _resolve(
        "SOAR_REPOSITORIES", config.soar_repositories, f"{root}/packages"
    )

    if config.parallel is None or config.parallel:
        if config.parallel_limit is None:
            config.parallel_limit = DEFAULT_PARALLEL_LIMIT

    seen: set[str] = set()
    for repo in config.repositories:
        if repo.name == "local" or repo.name in seen:
            raise InvalidConfigError()
        seen.add(repo.name)

    return config


@functools.cache
def get_config() -> Config:
    """Return the process-wide configuration, loading it on first use."""
    return load_config()


def generate_default_config() -> Path:
    """Write the default configuration file and return its path."""
    path = _config_file()
    if path.exists():
        raise ConfigAlreadyExistsError()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(tomli_w.dumps(default_config().to_dict()), encoding="utf-8")
    except OSError as exc:
        raise SoarError(f"IO error: {exc}") from exc
    return path