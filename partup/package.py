"""Inspection and validation of partup packages and their contents."""

from __future__ import annotations

import logging
import os
import re
from typing import Iterator, List, Optional, Sequence, Union

from partup.errors import PackageError, PackageErrorCode
from partup.mount import MOUNT_PREFIX

logger = logging.getLogger("partup-package")

PACKAGE_BASENAME = "package"
PACKAGE_PREFIX = f"{MOUNT_PREFIX}/{PACKAGE_BASENAME}"
LAYOUT_SUFFIX = ".yaml"
# Length of "-00000000/" that follows the prefix in a package mount point.
DEFAULT_PREFIX_LEN = len(PACKAGE_PREFIX) + 10

_BLANK_LINES = re.compile(r"^\s*$[\r\n]*", re.MULTILINE)
_SIZE_UNITS = ("kB", "MB", "GB", "TB", "PB", "EB")

PathArg = Union[str, "os.PathLike[str]"]


def _sorted_entries(directory: str) -> List[os.DirEntry]:
    try:
        with os.scandir(directory) as entries:
            return sorted(entries, key=lambda entry: entry.name)
    except OSError as exc:
        raise PackageError(
            f"Failed creating enumerator for '{directory}'",
            PackageErrorCode.ITER_FAILED,
        ) from exc


def get_layout_file(pwd: PathArg) -> str:
    """Return the path of the single layout file in the directory ``pwd``."""
    directory = os.fspath(pwd)
    layout_file: Optional[str] = None

    for entry in _sorted_entries(directory):
        child_path = os.path.join(directory, entry.name)
        if not (os.path.isfile(child_path) and child_path.endswith(LAYOUT_SUFFIX)):
            continue
        if layout_file is not None:
            raise PackageError(
                f"Multiple layout files detected: '{layout_file}' and '{child_path}'",
                PackageErrorCode.MULTIPLE_LAYOUT,
            )
        layout_file = child_path

    if layout_file is None:
        raise PackageError(
            f"No layout file found in '{directory}'",
            PackageErrorCode.MISSING_LAYOUT,
        )
    return layout_file


def validate_package_inputs(
    files: Sequence[PathArg],
    output: PathArg,
    force_overwrite: bool = False,
) -> str:
    """Check the input files of a new package and prepare its output path.

    Every input must exist and exactly one must be a layout configuration.
    An existing output file is removed when ``force_overwrite`` is set and is
    an error otherwise. Returns the layout configuration among the inputs.
    """
    output_path = os.fspath(output)
    if not output_path:
        raise ValueError("output must not be empty")

    layouts = []
    for file in map(os.fspath, files):
        if not os.path.exists(file):
            raise PackageError(
                f"Input file '{file}' does not exist", PackageErrorCode.NOT_FOUND
            )
        if file.endswith(LAYOUT_SUFFIX):
            layouts.append(file)

    if not layouts:
        raise PackageError(
            "Package input files do not contain a layout configuration",
            PackageErrorCode.MISSING_LAYOUT,
        )
    if len(layouts) > 1:
        raise PackageError(
            "Package input files must contain only one layout configuration",
            PackageErrorCode.MULTIPLE_LAYOUT,
        )

    if os.path.isfile(output_path):
        if not force_overwrite:
            raise PackageError(
                f"Package '{output_path}' already exists", PackageErrorCode.EXISTS
            )
        os.remove(output_path)

    return layouts[0]


def _format_size(size: int) -> str:
    if size < 1000:
        return f"{size} byte" if size == 1 else f"{size} bytes"
    value = float(size)
    unit = _SIZE_UNITS[-1]
    for index, name in enumerate(_SIZE_UNITS):
        if size < 1000 ** (index + 2) or index == len(_SIZE_UNITS) - 1:
            value = size / 1000 ** (index + 1)
            unit = name
            break
    return f"{value:.1f} {unit}"


def iter_dir_content(
    directory: PathArg,
    recursive: bool = True,
    print_size: bool = False,
    prefix_len: int = DEFAULT_PREFIX_LEN,
) -> Iterator[str]:
    """Yield one listing line per entry below ``directory``.

    The first ``prefix_len`` characters of every path are dropped. A
    directory that is descended into is announced with a trailing slash
    unless its shortened path is empty.
    """
    dir_path = os.fspath(directory)
    shown = dir_path[prefix_len:]
    if shown:
        yield f"{shown}/"

    for entry in _sorted_entries(dir_path):
        child_path = os.path.join(dir_path, entry.name)
        if recursive and os.path.isdir(child_path):
            yield from iter_dir_content(child_path, True, print_size, prefix_len)
            continue
        line = child_path[prefix_len:]
        if print_size:
            line += f" ({_format_size(os.stat(child_path).st_size)})"
        yield line


def strip_blank_lines(text: str) -> str:
    """Remove empty and whitespace-only lines from ``text``."""
    return _BLANK_LINES.sub("", text)