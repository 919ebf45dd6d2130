"""Exceptions raised by the query and install commands."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class LicenseFetchError(Exception):
    """Base class for failures reported to the user as a one-line message."""


class UnavailableError(LicenseFetchError):
    """The registry listing could not be retrieved."""


class RetrievalError(LicenseFetchError):
    def __init__(self, key: str, reason: Optional[str] = None) -> None:
        self.key = key
        self.reason = reason
        message = f"Could not retrieve license '{key}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class WriteError(LicenseFetchError):
    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"Could not write license file {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
