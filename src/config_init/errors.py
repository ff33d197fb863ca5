"""Exceptions raised by the config initializer."""

from __future__ import annotations

from typing import Optional, Sequence


class Ec0lintInitError(Exception):
    """Base class for all initializer failures."""


class RegistryError(Ec0lintInitError):
    """Raised by the registry oracle when peer data cannot be fetched.

    The resolver recovers from this by treating the peer set as empty.
    """


class InstalledQueryError(Ec0lintInitError):
    """Raised when the locally installed packages cannot be determined."""

    def __init__(self, message: str, packages: Sequence[str] = (), path: Optional[str] = None):
        super().__init__(message)
        self.packages = list(packages)
        self.path = path


class InstallError(Ec0lintInitError):
    """Raised when the package manager fails to install the requested modules."""

    def __init__(self, message: str, packages: Sequence[str] = (), returncode: Optional[int] = None):
        super().__init__(message)
        self.packages = list(packages)
        self.returncode = returncode


class ConfigWriteError(Ec0lintInitError):
    """Raised when the config file cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
