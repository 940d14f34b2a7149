"""Formatting of download progress: byte counts and transfer speed."""

from __future__ import annotations

_BINARY_PREFIXES = ("Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi")


def human_bytes(size: int) -> str:
    """Format a byte count with binary prefixes, e.g. ``1.50 KiB``."""
    amount = float(size)
    if amount < 1024:
        return f"{amount:.0f} B"
    for prefix in _BINARY_PREFIXES:
        amount /= 1024
        if amount < 1024 or prefix == _BINARY_PREFIXES[-1]:
            return f"{amount:.2f} {prefix}B"
    raise AssertionError("unreachable")


def calculate_speed(pos: int, elapsed: float) -> int:
    """Return bytes per second, or 0 when no time has elapsed."""
    if elapsed > 0.0:
        return int(pos / elapsed)
    return 0


def format_transfer(pos: int, length: int | None) -> str:
    """Format ``done/total``; an unknown total shows the bytes done so far."""
    total = pos if length is None else length
    return f"{human_bytes(pos)}/{human_bytes(total)}"


def format_speed(pos: int, elapsed: float) -> str:
    """Format the average transfer speed."""
    return f"{human_bytes(calculate_speed(pos, elapsed))}/s"