"""
Reader configuration.

``ReaderConfig`` is the struct form of the reader constructor: pass one
explicitly instead of relying on default arguments.
"""

import math
import numbers
from dataclasses import dataclass
from enum import Enum

from .constants import (
    DEFAULT_ADAPTATION_DELAY_US,
    I2C_BUS,
    MINIMUM_ADAPTATION_DELAY_US,
    NUNCHUCK_I2C_ADDRESS,
)
from .errors import ConfigurationError


class SessionMode(Enum):
    OBFUSCATED = "obfuscated"
    PLAIN = "plain"


def parse_mode(name) -> SessionMode:
    """Map 'plain' / 'obfuscated' (or a SessionMode) to SessionMode"""
    if isinstance(name, SessionMode):
        return name
    try:
        return SessionMode(str(name).strip().lower())
    except ValueError:
        raise ConfigurationError(f"Invalid initialization mode: {name!r}") from None


def check_adaptation_delay(delay_us) -> None:
    if (isinstance(delay_us, bool) or not isinstance(delay_us, numbers.Real)
            or not math.isfinite(delay_us)):
        raise ConfigurationError(f"Adaptation delay must be a finite number of microseconds, got {delay_us!r}")
    if delay_us < MINIMUM_ADAPTATION_DELAY_US:
        raise ConfigurationError(
            f"The minimum circuit adaptation wait time is {MINIMUM_ADAPTATION_DELAY_US} "
            f"microseconds, got {delay_us}"
        )


def check_publish_rate(rate_hz) -> None:
    if (isinstance(rate_hz, bool) or not isinstance(rate_hz, numbers.Real)
            or not math.isfinite(rate_hz) or rate_hz <= 0):
        raise ConfigurationError(f"Publish rate must be a positive number of Hz, got {rate_hz!r}")


@dataclass(frozen=True)
class ReaderConfig:
    mode: SessionMode
    adaptation_delay_us: int = DEFAULT_ADAPTATION_DELAY_US
    i2c_bus: int = I2C_BUS
    address: int = NUNCHUCK_I2C_ADDRESS
    debug: bool = False

    def validate(self) -> None:
        if not isinstance(self.mode, SessionMode):
            raise ConfigurationError(f"Invalid initialization mode: {self.mode!r}")
        check_adaptation_delay(self.adaptation_delay_us)
