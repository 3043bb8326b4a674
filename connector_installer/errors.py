from __future__ import annotations

from typing import Optional


class InstallerError(Exception):
    """Terminal installer failure; ``exit_code`` is what the process exits with."""

    exit_code = 1


class PrivilegeError(InstallerError):
    exit_code = 1


class EnrollmentError(InstallerError):
    exit_code = 2

    def __init__(self, message: str, reason: Optional[object] = None) -> None:
        super().__init__(message)
        self.reason = reason


class ArgumentError(InstallerError):
    exit_code = 3


class TokenFormatError(ArgumentError):
    pass


class UnsupportedPlatformError(InstallerError):
    exit_code = 4
