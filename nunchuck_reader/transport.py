"""
I2C transport used by the Nunchuck reader.

The reader only talks to the bus through the four calls below, with the
status convention of a C I2C library: a negative return value is a failure.
``SMBusTransport`` maps ``OSError`` from smbus2 onto that convention.
"""

import errno
from typing import Dict, Protocol, Tuple

from smbus2 import SMBus

from .constants import I2C_BUS


class I2CTransport(Protocol):
    def open(self, address: int) -> int: ...

    def write_byte(self, handle: int, value: int) -> int: ...

    def write_register(self, handle: int, register: int, value: int) -> int: ...

    def read_byte(self, handle: int) -> int: ...

    def close(self, handle: int) -> None: ...


def _status(e: OSError) -> int:
    return -(e.errno or errno.EIO)


class SMBusTransport:
    """smbus2-backed transport; one SMBus per opened handle"""

    def __init__(self, bus: int = I2C_BUS, debug: bool = False):
        self.bus_num = bus
        self.debug = debug
        self._open: Dict[int, Tuple[SMBus, int]] = {}

    def _log(self, msg):
        if self.debug:
            print(f"[I2C ] {msg}")

    def open(self, address: int) -> int:
        try:
            bus = SMBus(self.bus_num)
        except OSError as e:
            self._log(f"open /dev/i2c-{self.bus_num} failed: {e}")
            return _status(e)
        handle = bus.fd
        self._open[handle] = (bus, address)
        self._log(f"open bus={self.bus_num} addr=0x{address:02X} -> fd={handle}")
        return handle

    def write_byte(self, handle: int, value: int) -> int:
        bus, addr = self._open[handle]
        try:
            bus.write_byte(addr, value)
        except OSError as e:
            self._log(f"write 0x{value:02X} to 0x{addr:02X} failed: {e}")
            return _status(e)
        self._log(f"TX 0x{addr:02X} <- 0x{value:02X}")
        return 0

    def write_register(self, handle: int, register: int, value: int) -> int:
        bus, addr = self._open[handle]
        try:
            bus.write_byte_data(addr, register, value)
        except OSError as e:
            self._log(f"write reg 0x{register:02X} on 0x{addr:02X} failed: {e}")
            return _status(e)
        self._log(f"TX 0x{addr:02X} reg 0x{register:02X} <- 0x{value:02X}")
        return 0

    def read_byte(self, handle: int) -> int:
        bus, addr = self._open[handle]
        try:
            value = bus.read_byte(addr)
        except OSError as e:
            self._log(f"read from 0x{addr:02X} failed: {e}")
            return _status(e)
        self._log(f"RX 0x{addr:02X} -> 0x{value:02X}")
        return value

    def close(self, handle: int) -> None:
        entry = self._open.pop(handle, None)
        if entry is None:
            return
        entry[0].close()
        self._log(f"close fd={handle}")
