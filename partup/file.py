"""Small file helpers: raw reads, copies and size queries."""

from __future__ import annotations

import logging
import os
import shutil

logger = logging.getLogger("partup-file")


def read_raw(filename: str, offset: int = 0, count: int = -1) -> bytes:
    """Read ``count`` bytes from ``filename`` starting at ``offset``.

    A negative ``count`` reads everything from ``offset`` to the end of the file.
    """
    with open(filename, "rb") as stream:
        size = os.fstat(stream.fileno()).st_size
        if count < 0:
            count = max(size - offset, 0)
        stream.seek(offset)
        return stream.read(count)


def copy(src: str, dest: str) -> str:
    """Copy ``src`` into the directory ``dest``, keeping its basename.

    Returns the path of the new file. An existing target is not overwritten.
    """
    if not src or not dest:
        raise ValueError("source and destination must not be empty")

    logger.debug("Copying '%s' to '%s'", src, dest)

    out_path = os.path.join(dest, os.path.basename(src))
    with open(src, "rb") as source, open(out_path, "xb") as target:
        shutil.copyfileobj(source, target)
    return out_path


def get_size(path: str) -> int:
    """Return the size of the file at ``path`` in bytes."""
    if not path:
        raise ValueError("path must not be empty")
    return os.stat(path).st_size