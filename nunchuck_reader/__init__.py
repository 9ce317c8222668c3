"""Nunchuck reader over I2C."""

from .config import ReaderConfig, SessionMode, parse_mode
from .data import Accelerometer, Button, Joystick, NunchuckData, RawNunchuckData, map_values
from .errors import (
    ConfigurationError,
    DeviceReadError,
    DeviceUnavailableError,
    ErrorKind,
    NunchuckError,
    Result,
)
from .reader import NunchuckReader

__version__ = "0.1.0"
