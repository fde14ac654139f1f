"""Base class for flash devices that partup can initialize, lay out and write."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from partup.errors import ErrorCode, PartupError

logger = logging.getLogger("partup-flash")


@dataclass(frozen=True)
class Flash:
    """A flash device driven through three stages: init, layout and data.

    Concrete device types override :meth:`init_device`, :meth:`setup_layout`
    and :meth:`write_data`. The base implementations report that the stage is
    missing for the concrete type.
    """

    device_path: Optional[str] = None
    config: Any = None
    prefix: Optional[str] = None
    skip_checksums: bool = False

    def _missing_stage(self, stage: str, code: ErrorCode) -> PartupError:
        message = (
            f"Flash of type '{type(self).__name__}' does not implement "
            f"Flash.{stage}"
        )
        logger.critical("%s", message)
        return PartupError(message, code)

    def init_device(self) -> None:
        """Initialize the device, e.g. write its partition table."""
        raise self._missing_stage("init_device", ErrorCode.FLASH_INIT)

    def setup_layout(self) -> None:
        """Create the layout on the device, e.g. its partitions."""
        raise self._missing_stage("setup_layout", ErrorCode.FLASH_LAYOUT)

    def write_data(self) -> None:
        """Write the input data described by the layout configuration."""
        raise self._missing_stage("write_data", ErrorCode.FLASH_DATA)