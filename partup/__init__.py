"""Helpers for flash device naming, raw writing, mount detection and layout packages."""

__version__ = "1.0.0"

__all__ = ["errors", "file", "flash", "log", "mount", "package", "utils"]