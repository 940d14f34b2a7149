"""Path expansion, size handling and small file helpers."""

from __future__ import annotations

import os
import pwd
import re
from pathlib import Path

from soarpkg.errors import SoarError

_VAR_NAME = re.compile(r"\w*")

_SIZE_UNITS = (
    ("B", 1),
    ("KB", 1000),
    ("MB", 1000 * 1000),
    ("GB", 1000 * 1000 * 1000),
    ("KiB", 1024),
    ("MiB", 1024 * 1024),
    ("GiB", 1024 * 1024 * 1024),
)

_U64_MAX = 2**64 - 1


def _username() -> str:
    for key in ("USER", "LOGNAME"):
        if key in os.environ:
            return os.environ[key]
    try:
        return pwd.getpwuid(os.geteuid()).pw_name
    except KeyError as exc:
        raise SoarError("Couldn't determine username. Please fix the system.") from exc


def home_path() -> str:
    """Return the user's home directory."""
    home = os.environ.get("HOME")
    if home is not None:
        return home
    return f"/home/{_username()}"


def home_config_path() -> str:
    """Return the XDG configuration directory."""
    return os.environ.get("XDG_CONFIG_HOME") or f"{home_path()}/.config"


def home_cache_path() -> str:
    """Return the XDG cache directory."""
    return os.environ.get("XDG_CACHE_HOME") or f"{home_path()}/.cache"


def home_data_path() -> str:
    """Return the XDG data directory."""
    return os.environ.get("XDG_DATA_HOME") or f"{home_path()}/.local/share"


def _expand_variable(name: str) -> str:
    if name == "HOME":
        return home_path()
    try:
        return os.environ[name]
    except KeyError as exc:
        raise SoarError(
            "Environment variable error: environment variable not found"
        ) from exc


def build_path(path: str) -> Path:
    """Expand ``$VAR`` references and a leading ``~`` in ``path``."""
    result = ""
    pos = 0
    while pos < len(path):
        char = path[pos]
        if char == "$":
            match = _VAR_NAME.match(path, pos + 1)
            name = match.group()
            pos = match.end()
            result += _expand_variable(name) if name else "$"
            continue
        if char == "~" and not result:
            result += home_path()
        else:
            result += char
        pos += 1
    return Path(result)


def format_bytes(size: int) -> str:
    """Format a byte count using binary units with two decimals."""
    kib = 1024
    mib = kib * 1024
    gib = mib * 1024
    if size >= gib:
        return f"{size / gib:.2f} GiB"
    if size >= mib:
        return f"{size / mib:.2f} MiB"
    if size >= kib:
        return f"{size / kib:.2f} KiB"
    return f"{size} B"


def _parse_number(text: str) -> float | None:
    if not text or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _saturate(value: float) -> int:
    if value != value or value <= 0:
        return 0
    if value >= _U64_MAX:
        return _U64_MAX
    return int(value)


def _strip_repeated_suffix(text: str, suffix: str) -> str:
    while text.endswith(suffix):
        text = text[: -len(suffix)]
    return text


def parse_size(size_str: str) -> int | None:
    """Parse a human size such as ``"12 MB"`` into a byte count.

    The text is upper-cased before matching, so the binary unit spellings
    (``KiB`` and friends) never match and yield ``None``.
    """
    upper = size_str.strip().upper()
    for unit, multiplier in _SIZE_UNITS:
        if upper.endswith(unit):
            number = _parse_number(_strip_repeated_suffix(upper, unit).strip())
            if number is not None:
                return _saturate(number * multiplier)
    return None


def calc_magic_bytes(file_path: str | os.PathLike, size: int) -> bytes:
    """Read exactly the first ``size`` bytes of a file."""
    try:
        with open(file_path, "rb") as handle:
            data = handle.read(size)
    except OSError as exc:
        raise SoarError(f"IO error: {exc}") from exc
    if len(data) < size:
        raise SoarError("IO error: failed to fill whole buffer")
    return data


def create_symlink(source: str | os.PathLike, target: str | os.PathLike) -> None:
    """Create ``target`` pointing at ``source``, replacing an existing symlink."""
    target = Path(target)
    try:
        if target.is_symlink():
            target.unlink()
        os.symlink(source, target)
    except OSError as exc:
        raise SoarError(f"IO error: {exc}") from exc