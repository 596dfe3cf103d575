"""Discovery of mounted USB storage."""

from __future__ import annotations

import logging
import os

_log = logging.getLogger(__name__)

_USB_DEVICE_MARKERS = ("/dev/sd", "/dev/usb")


def list_mounted_usb_paths(
    mounts_path: str | os.PathLike[str] = "/proc/mounts",
) -> list[str]:
    """Return the mount points of USB-like block devices.

    Returns an empty list when the mount table cannot be read.
    """
    try:
        with open(mounts_path, encoding="utf-8", errors="replace") as mounts:
            lines = [line.rstrip("\n") for line in mounts]
    except OSError:
        _log.error("Failed to open %s", mounts_path)
        return []

    paths = []
    for line in lines:
        if not any(marker in line for marker in _USB_DEVICE_MARKERS):
            continue
        _device, sep, rest = line.partition(" ")
        if sep:
            paths.append(rest.partition(" ")[0])
    return paths