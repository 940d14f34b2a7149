# soarpkg

Building blocks of a package manager for portable Linux software: static
binaries, AppImages and FlatImages. It reads and writes its TOML
configuration, manages its directory tree, parses package queries, imports
repository metadata into SQLite, recognises package formats by their magic
bytes, links icons and desktop entries into place, and removes installed
packages. A small `soar` command exposes the configuration and directory
parts.

## Installation

```
pip install soarpkg
```

This installs the `soar` command.

## The `soar` command

On every run, `soar` first creates its binary, database and package
directories if they are missing. Run without arguments, it prints its help
to standard error and exits with status 2.

Write a default configuration file to `$XDG_CONFIG_HOME/soar/config.toml`
(or `~/.config/soar/config.toml`):

```
soar defconfig
```

The command refuses to overwrite an existing file.

Show where soar keeps its files:

```
soar env
```

This prints `SOAR_ROOT`, `SOAR_BIN`, `SOAR_DB`, `SOAR_CACHE`,
`SOAR_PACKAGE` and `SOAR_REPOSITORIES`.

Delete the running `soar` executable itself:

```
soar self uninstall
```

Configuration and data files are left in place and have to be removed by
hand.

Global options: `-v` (repeat for more detail), `-q` for errors only, and
`-j` for JSON log lines. Informational messages go to standard output and
everything else to standard error. A lone `-` among the arguments is
replaced by the whitespace-separated words read from standard input.

## What it does not do

There are no commands to sync, search, list, install, update, run or
download packages. Nothing in the package talks to the network: remote
metadata has to be obtained some other way before it can be imported.
The metadata database schema (the `repository`, `collections`,
`families`, `icons`, `packages` and related tables) is not created by the
package either; `Database.import_metadata` expects those tables to exist.

## Configuration

The configuration file is TOML. Its keys:

| Key                  | Meaning                                   | Default                         |
|----------------------|-------------------------------------------|---------------------------------|
| `soar_root`          | base directory for all data               | `$XDG_DATA_HOME/soar`           |
| `soar_bin`           | where binary symlinks go                  | `<root>/bin`                    |
| `soar_cache`         | cache directory                           | `<root>/cache`                  |
| `soar_db`            | installation database directory           | `<root>/db`                     |
| `soar_packages`      | where packages are unpacked               | `<root>/packages`               |
| `soar_repositories`  | repository metadata databases             | `<root>/repos` (see below)      |
| `repositories`       | list of `{name, url, metadata}` tables    | one `pkgforge` repository       |
| `parallel`           | download in parallel                      | `true`                          |
| `parallel_limit`     | number of parallel downloads              | `4`                             |
| `search_limit`       | number of search results shown            | `20`                            |

`soar_root` and `repositories` are required in a configuration file. When
no file exists the built-in defaults above are used; when a file exists
but leaves `soar_repositories` out, it falls back to `<root>/packages`.
`parallel_limit` falls back to 4 unless `parallel` is `false`.

The environment variables `SOAR_ROOT`, `SOAR_BIN`, `SOAR_CACHE`, `SOAR_DB`,
`SOAR_PACKAGE` and `SOAR_REPOSITORIES` override the file. Paths may use a
leading `~` and `$VARIABLE`. A repository may not be called `local`, and
repository names must be unique; otherwise `InvalidConfigError` is raised.

## Package queries

Packages are named with the form

```
[family/]name[#collection][@version][:repo]
```

for example `coreutils/ls#bin@9.5:pkgforge`. Queries are lower-cased
before parsing.

## Using it as a library

```python
from soarpkg.query import PackageQuery, PackageFilter
from soarpkg.utils import parse_size, format_bytes, build_path
from soarpkg.formats import detect_file_type, PackageFormat
from soarpkg.update import needs_update, matches_filter

query = PackageQuery.parse("coreutils/ls:pkgforge")
package_filter = PackageFilter.from_query(query)

parse_size("1.5 MB")       # 1500000
format_bytes(1572864)      # "1.50 MiB"
build_path("~/bin")        # PosixPath to your home's bin directory

detect_file_type("some-binary") is PackageFormat.APPIMAGE
```

Other modules:

- `soarpkg.config`: `Config`, `Repository`, `default_config()`,
  `load_config()`, `get_config()`, `generate_default_config()`.
- `soarpkg.paths`: `root_path()`, `bin_path()`, `cache_path()`,
  `db_path()`, `repositories_path()`, `packages_path()`,
  `setup_required_paths()`, `cleanup()` (drops cached binaries older than
  eight hours, then broken links) and `remove_broken_symlink()`.
- `soarpkg.models`: `Package`, `InstalledPackage`, `RemotePackage` and
  `RemotePackageMetadata`, the last two built from decoded JSON with
  `from_dict`.
- `soarpkg.database`: `Database.open`, `Database.open_multi` (attaching
  further files as `shard1`, `shard2`, ...), `Database.import_metadata`
  and `PackageRepository`.
- `soarpkg.desktop`: icon resizing to the nearest supported size,
  `symlink_icon`, `rewrite_desktop_entry`, `symlink_desktop`,
  `create_default_desktop_entry` and `setup_portable_dir`.
- `soarpkg.remove`: `PackageRemover`, which deletes a package's binary
  link, its install directory and its database record.
- `soarpkg.progress`: `human_bytes`, `calculate_speed`, `format_transfer`
  and `format_speed`.
- `soarpkg.logsetup`: `setup_logging`, `level_for`, `CustomFormatter`
  and `JsonFormatter`.

Errors are raised as subclasses of `soarpkg.errors.SoarError`, such as
`InvalidPackageQueryError`, `InvalidConfigError` and `InvalidChecksumError`.

## Running the tests

```
pip install -e ".[test]"
pytest
```