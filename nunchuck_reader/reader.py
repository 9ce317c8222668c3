"""
Nunchuck device session.

Opens the I2C connection, runs one of the two initialization handshakes and
then serves read cycles:

    request byte 0x00 -> wait adaptation delay -> read 6 bytes
    -> de-obfuscate (if enabled) -> unpack

The adaptation delay is a hardware timing contract: the device needs at
least 300 us between a write and the following read.

A reader must be used from one caller at a time.
"""

import time

from .config import ReaderConfig, SessionMode, check_adaptation_delay
from .constants import (
    DEFAULT_ADAPTATION_DELAY_US,
    FRAME_LENGTH,
    NUNCHUCK_I2C_ADDRESS,
    OBFUSCATED_INIT_WRITES,
    PLAIN_INIT_WRITES,
    REQUEST_BYTE,
)
from .data import NunchuckData, RawNunchuckData, map_values
from .errors import (
    ConfigurationError,
    DeviceReadError,
    DeviceUnavailableError,
    NunchuckError,
    Result,
)
from .protocol import decode_frame
from .transport import SMBusTransport


def sleep_microseconds(us):
    time.sleep(us / 1_000_000)


class NunchuckReader:
    def __init__(self, mode, adaptation_delay_us=DEFAULT_ADAPTATION_DELAY_US, *,
                 transport=None, sleep=sleep_microseconds, address=NUNCHUCK_I2C_ADDRESS):
        if not isinstance(mode, SessionMode):
            raise ConfigurationError(f"Invalid initialization mode: {mode!r}")
        check_adaptation_delay(adaptation_delay_us)

        self.adaptation_delay_us = adaptation_delay_us
        self.transport = transport if transport is not None else SMBusTransport()
        self._sleep = sleep
        self._handle = None

        handle = self.transport.open(address)
        if handle < 0:
            raise DeviceUnavailableError(
                f"Error during the setup of the I2C communication with the Nunchuck at 0x{address:02X}",
                status=handle,
            )
        self._handle = handle

        try:
            if mode is SessionMode.OBFUSCATED:
                self._init_registers(OBFUSCATED_INIT_WRITES)
            else:
                self._init_registers(PLAIN_INIT_WRITES)
        except Exception:
            self.close()
            raise
        self._obfuscated = mode is SessionMode.OBFUSCATED

    @classmethod
    def from_config(cls, config: ReaderConfig, transport=None, sleep=sleep_microseconds):
        config.validate()
        if transport is None:
            transport = SMBusTransport(config.i2c_bus, debug=config.debug)
        return cls(config.mode, config.adaptation_delay_us,
                   transport=transport, sleep=sleep, address=config.address)

    @classmethod
    def open(cls, mode, adaptation_delay_us=DEFAULT_ADAPTATION_DELAY_US, **kwargs) -> Result:
        """Construct a reader, returning the outcome as a Result instead of raising"""
        try:
            return Result(value=cls(mode, adaptation_delay_us, **kwargs))
        except NunchuckError as e:
            return Result(error=e)

    # ---- initialization ----
    def _init_registers(self, writes):
        for register, value in writes:
            status = self.transport.write_register(self._handle, register, value)
            if status < 0:
                raise DeviceUnavailableError(
                    f"Nunchuck rejected init write 0x{value:02X} to register 0x{register:02X}",
                    status=status,
                )
        # once, after the whole sequence
        self._sleep(self.adaptation_delay_us)

    def is_obfuscated(self) -> bool:
        return self._obfuscated

    @property
    def closed(self) -> bool:
        return self._handle is None

    # ---- read cycle ----
    def _fetch_frame(self):
        if self._handle is None:
            raise DeviceUnavailableError("Nunchuck reader is closed")

        status = self.transport.write_byte(self._handle, REQUEST_BYTE)
        if status < 0:
            raise DeviceReadError("Failed to request a new Nunchuck sample", status=status)
        self._sleep(self.adaptation_delay_us)

        frame = []
        for i in range(FRAME_LENGTH):
            value = self.transport.read_byte(self._handle)
            if value < 0:
                raise DeviceReadError(
                    f"Failed to read byte {i} of {FRAME_LENGTH} from the Nunchuck",
                    status=value,
                    byte_index=i,
                )
            frame.append(value)
        return frame

    def read_raw(self) -> RawNunchuckData:
        """
        Read the raw integer values from the Nunchuck.
        Blocks for at least the adaptation delay.
        """
        return decode_frame(self._fetch_frame(), self._obfuscated)

    def read_values(self) -> NunchuckData:
        return map_values(self.read_raw())

    def try_read_raw(self) -> Result:
        try:
            return Result(value=self.read_raw())
        except NunchuckError as e:
            return Result(error=e)

    def try_read_values(self) -> Result:
        try:
            return Result(value=self.read_values())
        except NunchuckError as e:
            return Result(error=e)

    # ---- resource release ----
    def close(self):
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        self.transport.close(handle)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        mode = "obfuscated" if getattr(self, "_obfuscated", False) else "plain"
        state = "closed" if self.closed else "ready"
        return f"NunchuckReader(mode={mode}, delay={self.adaptation_delay_us}us, {state})"
