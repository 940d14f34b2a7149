"""Recognition of package file formats by their magic bytes."""

from __future__ import annotations

import os
from enum import Enum
from typing import BinaryIO

from soarpkg.errors import SoarError

ELF_MAGIC_BYTES = bytes([0x7F, 0x45, 0x4C, 0x46])
APPIMAGE_MAGIC_BYTES = bytes([0x41, 0x49, 0x02, 0x00])
FLATIMAGE_MAGIC_BYTES = bytes([0x46, 0x49, 0x01, 0x00])

PNG_MAGIC_BYTES = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])
SVG_MAGIC_BYTES = bytes([0x3C, 0x73, 0x76, 0x67])
XML_MAGIC_BYTES = bytes([0x3C, 0x3F, 0x78, 0x6D, 0x6C])

CAP_SYS_ADMIN = 21
CAP_MKNOD = 27

_HEADER_SIZE = 12


class PackageFormat(Enum):
    """Kinds of package files."""

    APPIMAGE = "appimage"
    FLATIMAGE = "flatimage"
    ELF = "elf"
    UNKNOWN = "unknown"


def _read_exact(stream: BinaryIO, size: int) -> bytes | None:
    data = bytearray()
    while len(data) < size:
        try:
            chunk = stream.read(size - len(data))
        except OSError:
            return None
        if not chunk:
            return None
        data += chunk
    return bytes(data)


def get_file_type(stream: BinaryIO) -> PackageFormat:
    """Classify a package from the first twelve bytes of ``stream``."""
    header = _read_exact(stream, _HEADER_SIZE)
    if header is None:
        return PackageFormat.UNKNOWN
    marker = header[8:]
    if marker == APPIMAGE_MAGIC_BYTES:
        return PackageFormat.APPIMAGE
    if marker == FLATIMAGE_MAGIC_BYTES:
        return PackageFormat.FLATIMAGE
    if header[:4] == ELF_MAGIC_BYTES:
        return PackageFormat.ELF
    return PackageFormat.UNKNOWN


def detect_file_type(path: str | os.PathLike) -> PackageFormat:
    """Classify the package file at ``path``."""
    try:
        with open(path, "rb") as handle:
            return get_file_type(handle)
    except OSError as exc:
        raise SoarError(f"IO error: {exc}") from exc