"""Desktop integration: icons, desktop entries and portable directories."""

from __future__ import annotations

import os
import re
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from soarpkg.errors import SoarError
from soarpkg.models import Package
from soarpkg.paths import bin_path
from soarpkg.utils import create_symlink, home_data_path

SUPPORTED_DIMENSIONS = (
    (16, 16),
    (24, 24),
    (32, 32),
    (48, 48),
    (64, 64),
    (72, 72),
    (80, 80),
    (96, 96),
    (128, 128),
    (192, 192),
    (256, 256),
    (512, 512),
)

_DESKTOP_KEY_RE = re.compile(r"^(Icon|Exec|TryExec)=(.*)", re.MULTILINE)


def find_nearest_supported_dimension(width: int, height: int) -> tuple[int, int]:
    """Return the supported icon size closest to ``width`` x ``height``."""
    return min(
        SUPPORTED_DIMENSIONS,
        key=lambda dim: abs(dim[0] - width) + abs(dim[1] - height),
    )


def _fit_within(width: int, height: int, bound_w: int, bound_h: int) -> tuple[int, int]:
    ratio = min(bound_w / width, bound_h / height)
    return max(round(width * ratio), 1), max(round(height * ratio), 1)


def normalize_image(image: Image.Image) -> Image.Image:
    """Scale ``image`` to fit the nearest supported size, keeping its aspect ratio."""
    width, height = image.size
    target = find_nearest_supported_dimension(width, height)
    if (width, height) == target:
        return image
    new_size = _fit_within(width, height, *target)
    return image.resize(new_size, Image.Resampling.LANCZOS)


def symlink_icon(real_path: str | os.PathLike, pkg_name: str) -> Path:
    """Normalise an icon in place and link it into the hicolor icon theme."""
    real_path = Path(real_path)
    try:
        with Image.open(real_path) as opened:
            opened.load()
            image_format = opened.format
            original = opened.copy()
        normalized = normalize_image(original)
        if normalized.size != original.size:
            normalized.save(real_path, format=image_format)
    except (UnidentifiedImageError, ValueError) as exc:
        raise SoarError(f"Image Error: {exc}") from exc
    except OSError as exc:
        raise SoarError(f"IO error: {exc}") from exc

    width, height = normalized.size
    ext = real_path.suffix[1:]
    final_path = Path(
        f"{home_data_path()}/icons/hicolor/{width}x{height}/apps/{pkg_name}-soar.{ext}"
    )
    try:
        final_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SoarError(f"IO error: {exc}") from exc
    create_symlink(real_path, final_path)
    return final_path


def rewrite_desktop_entry(content: str, pkg: str, bin_dir: str | os.PathLike) -> str:
    """Point the Icon, Exec and TryExec keys of a desktop entry at ``pkg``."""

    def replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key == "Icon":
            return f"Icon={pkg}"
        return f"{key}={bin_dir}/{pkg}"

    return _DESKTOP_KEY_RE.sub(replace, content)


def symlink_desktop(real_path: str | os.PathLike, package: Package) -> Path:
    """Rewrite a desktop entry in place and link it into the applications directory."""
    real_path = Path(real_path)
    try:
        content = real_path.read_text(encoding="utf-8")
        real_path.write_text(
            rewrite_desktop_entry(content, package.pkg, bin_path()), encoding="utf-8"
        )
    except (OSError, UnicodeDecodeError) as exc:
        raise SoarError(f"IO error: {exc}") from exc
    final_path = Path(f"{home_data_path()}/applications/{package.pkg_name}-soar.desktop")
    create_symlink(real_path, final_path)
    return final_path


def create_default_desktop_entry(bin_name: str, name: str, categories: str) -> bytes:
    """Return a minimal desktop entry for a package without one."""
    return (
        "[Desktop Entry]\n"
        "Type=Application\n"
        f"Name={name}\n"
        f"Icon={bin_name}\n"
        f"Exec={bin_name}\n"
        f"Categories={categories};\n"
    ).encode()


def _prepare_portable(local: Path, requested: str | None, pkg_name: str, suffix: str) -> None:
    if requested is None:
        return
    if not requested:
        local.mkdir()
        return
    shared = (Path(requested) / pkg_name).with_suffix(suffix)
    shared.mkdir(parents=True, exist_ok=True)
    create_symlink(shared, local)


def setup_portable_dir(
    package_path: str | os.PathLike,
    package: Package,
    portable: str | None,
    portable_home: str | None,
    portable_config: str | None,
) -> None:
    """Create the package's portable home and config directories.

    An empty string creates the directory beside the package; any other value
    names a base directory the package's directory is created in and linked from.
    """
    package_path = Path(package_path)
    pkg_config = package_path.with_suffix(".config")
    pkg_home = package_path.with_suffix(".home")

    if portable is not None:
        portable_home = portable
        portable_config = portable

    try:
        _prepare_portable(pkg_home, portable_home, package.pkg_name, ".home")
        _prepare_portable(pkg_config, portable_config, package.pkg_name, ".config")
    except OSError as exc:
        raise SoarError(f"IO error: {exc}") from exc