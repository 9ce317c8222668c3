"""
Error taxonomy for the Nunchuck reader.

Every error is tagged with an ``ErrorKind`` and may carry the status code the
transport returned. Errors are raised to the immediate caller; nothing in the
reader logs or retries. ``Result`` is the explicit-result alternative used by
the ``try_*`` / ``open`` entry points.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    CONFIGURATION = "configuration"
    DEVICE_UNAVAILABLE = "device_unavailable"
    DEVICE_READ = "device_read"


class NunchuckError(Exception):
    kind = None

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self):
        if self.status is None:
            return self.message
        return f"{self.message} (status={self.status})"


class ConfigurationError(NunchuckError):
    """Bad reader parameters, detected before any bus I/O"""
    kind = ErrorKind.CONFIGURATION


class DeviceUnavailableError(NunchuckError):
    """The bus could not be opened or the device rejected initialization"""
    kind = ErrorKind.DEVICE_UNAVAILABLE


class DeviceReadError(NunchuckError):
    """A read cycle failed; the reader itself is still usable"""
    kind = ErrorKind.DEVICE_READ

    def __init__(self, message: str, status: Optional[int] = None, byte_index: Optional[int] = None):
        super().__init__(message, status)
        self.byte_index = byte_index


@dataclass(frozen=True)
class Result:
    value: Any = None
    error: Optional[NunchuckError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self):
        """Return the value or raise the carried error"""
        if self.error is not None:
            raise self.error
        return self.value
