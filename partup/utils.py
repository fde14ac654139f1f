"""Helpers for device paths and raw data transfer onto block devices."""

from __future__ import annotations

import logging
import os
import re
from typing import Optional

from partup.errors import ErrorCode, PartupError

logger = logging.getLogger("partup-utils")

MEBIBYTE = 1024 * 1024
SYSFS_BLOCK_ROOT = "/sys/class/block"

_INDEXED_PARTITIONS = re.compile(r"(mmcblk|loop)[0-9]+")
_LETTERED_DISK = re.compile(r"sd[a-z]+")


def path_from_filename(filename: str, prefix: Optional[str] = None) -> str:
    """Build the path of an input file, relative to ``prefix`` if given."""
    if not filename:
        raise PartupError("filename is empty", ErrorCode.FAILED)
    if os.path.isabs(filename):
        raise PartupError(f"Filename '{filename}' must be relative", ErrorCode.FAILED)
    if prefix:
        return os.path.join(prefix, filename)
    return filename


def _check_device(device: str) -> None:
    if not device:
        raise ValueError("device must not be empty")


def device_get_partition_path(device: str, index: int) -> str:
    """Return the path of partition ``index`` (starting at 1) of ``device``."""
    _check_device(device)
    if index <= 0:
        raise ValueError("partition index must be positive")

    if _INDEXED_PARTITIONS.search(device):
        return f"{device}p{index}"
    if _LETTERED_DISK.search(device):
        return f"{device}{index}"
    raise PartupError(f"Invalid device name '{device}'", ErrorCode.FAILED)


def device_get_partition_pattern(device: str) -> str:
    """Return a regular expression matching ``device`` and its partitions."""
    _check_device(device)

    if _INDEXED_PARTITIONS.search(device):
        return f"^{device}($|p[0-9]+)"
    if _LETTERED_DISK.search(device):
        return f"^{device}($|[0-9]+)"
    raise PartupError(f"Invalid device name '{device}'", ErrorCode.FAILED)


def str_pre_remove(string: str, n: int) -> str:
    """Return ``string`` with its first ``n`` characters removed."""
    return string[n:]


def write_raw(
    input_path: str,
    output_path: str,
    sector_size: int,
    input_offset: int = 0,
    output_offset: int = 0,
    size: int = 0,
) -> int:
    """Copy raw data from ``input_path`` into the existing ``output_path``.

    Offsets and ``size`` are given in sectors of ``sector_size`` bytes. A
    ``size`` of zero or less uses the whole input file. Returns the number of
    bytes written.
    """
    logger.debug("Writing '%s' to '%s'", input_path, output_path)

    input_offset *= sector_size
    output_offset *= sector_size

    if size > 0:
        input_size = size * sector_size
    else:
        input_size = os.stat(input_path).st_size

    if input_offset >= input_size:
        raise PartupError("Input offset exceeds input file size", ErrorCode.FAILED)

    remaining = input_size - input_offset
    written = 0
    with open(input_path, "rb") as source, open(output_path, "r+b") as target:
        source.seek(input_offset)
        target.seek(output_offset)
        while remaining > 0:
            chunk = source.read(min(remaining, MEBIBYTE))
            if not chunk:
                break
            target.write(chunk)
            written += len(chunk)
            remaining -= len(chunk)
    return written


def has_bootpart(device: str) -> bool:
    """Tell whether both hardware boot partitions of ``device`` exist."""
    _check_device(device)
    return all(os.path.exists(f"{device}boot{i}") for i in (0, 1))


def _bootpart_force_ro(bootpart: str, read_only: bool, sysfs_root: str) -> None:
    path = os.path.join(sysfs_root, os.path.basename(bootpart), "force_ro")
    try:
        with open(path, "w") as control:
            control.write(str(int(read_only)))
    except OSError as exc:
        raise PartupError(
            f"Failed writing '{int(read_only)}' to '{path}'", ErrorCode.FAILED
        ) from exc


def write_raw_bootpart(
    input_path: str,
    device_path: str,
    sector_size: int,
    bootpart: int,
    input_offset: int = 0,
    output_offset: int = 0,
    sysfs_root: str = SYSFS_BLOCK_ROOT,
) -> int:
    """Write ``input_path`` to hardware boot partition ``bootpart`` of a device.

    The boot partition is made writable for the duration of the write and set
    read-only again afterwards. Returns the number of bytes written.
    """
    if not input_path or not device_path:
        raise ValueError("input and device paths must not be empty")
    if bootpart not in (0, 1):
        raise ValueError("boot partition must be 0 or 1")

    bootpart_device = f"{device_path}boot{bootpart}"

    _bootpart_force_ro(bootpart_device, False, sysfs_root)
    try:
        return write_raw(input_path, bootpart_device, sector_size,
                         input_offset, output_offset, 0)
    finally:
        _bootpart_force_ro(bootpart_device, True, sysfs_root)