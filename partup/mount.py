"""Mount point creation and detection of mounted device partitions."""

from __future__ import annotations

import logging
import os
import re
from typing import List

from partup.errors import ErrorCode, PartupError
from partup.utils import device_get_partition_pattern

logger = logging.getLogger("partup-mount")

MOUNT_PREFIX = "/run/partup"
MOUNTS_FILE = "/proc/self/mounts"

_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


def create_mount_point(name: str, prefix: str = MOUNT_PREFIX) -> str:
    """Create the directory ``prefix/name`` if needed and return its path."""
    mount_point = os.path.join(prefix, name)

    if os.path.isdir(mount_point):
        logger.debug("Mount point '%s' already exists", mount_point)
        return mount_point

    try:
        os.makedirs(mount_point, mode=0o775)
    except OSError as exc:
        raise PartupError(
            f"Failed creating mount point '{mount_point}', errno {exc.errno}",
            ErrorCode.FAILED,
        ) from exc
    return mount_point


def _unescape(field: str) -> str:
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), field)


def find_mounted(device: str, mounts_file: str = MOUNTS_FILE) -> List[str]:
    """Return the mounted sources that are ``device`` or one of its partitions."""
    if not device:
        raise ValueError("device must not be empty")

    pattern = re.compile(device_get_partition_pattern(device))
    try:
        with open(mounts_file, encoding="utf-8", errors="surrogateescape") as table:
            lines = table.read().splitlines()
    except OSError as exc:
        raise PartupError(
            f"Failed reading mount table '{mounts_file}'", ErrorCode.MOUNT
        ) from exc

    mounted = []
    for line in lines:
        fields = line.split()
        if not fields:
            continue
        source = _unescape(fields[0])
        if pattern.search(source):
            logger.debug("Partition '%s' is mounted", source)
            mounted.append(source)
    return mounted


def device_mounted(device: str, mounts_file: str = MOUNTS_FILE) -> bool:
    """Tell whether ``device`` or any of its partitions is mounted."""
    if not device:
        raise ValueError("device must not be empty")
    try:
        return bool(find_mounted(device, mounts_file))
    except PartupError as exc:
        raise PartupError(
            f"Failed checking if device '{device}' is mounted", ErrorCode.MOUNT
        ) from exc