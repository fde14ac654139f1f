"""Exception types and error codes used throughout partup."""

from __future__ import annotations

from enum import IntEnum
from typing import Union


class ErrorCode(IntEnum):
    """Error codes for general partup failures."""

    FAILED = 0
    FLASH_INIT = 1
    FLASH_LAYOUT = 2
    FLASH_DATA = 3
    EMMC_PARSE = 4
    CONFIG_INIT_FAILED = 5
    CONFIG_INVALID_ROOT = 6
    CONFIG_PARSING_FAILED = 7
    CHECKSUM = 8
    UNKNOWN_FSTYPE = 9
    MOUNT = 10


class PackageErrorCode(IntEnum):
    """Error codes for package handling failures."""

    CREATION_FAILED = 0
    EXISTS = 1
    ITER_FAILED = 2
    MISSING_LAYOUT = 3
    MULTIPLE_LAYOUT = 4
    NOT_FOUND = 5
    FAILED = 6


class PartupError(Exception):
    """An error raised by partup, carrying a machine readable code."""

    def __init__(
        self,
        message: str,
        code: Union[ErrorCode, PackageErrorCode] = ErrorCode.FAILED,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, {self.code!r})"


class PackageError(PartupError):
    """An error raised while creating, mounting or inspecting a package."""

    def __init__(
        self,
        message: str,
        code: PackageErrorCode = PackageErrorCode.FAILED,
    ) -> None:
        super().__init__(message, code)