"""
In-memory stand-in for the I2C bus, for running the reader without hardware.

Behaves like a Nunchuck at 0x52: register writes select the mode, the request
byte latches the next frame, and read_byte serves that frame one byte at a
time. Every call is recorded in ``ops`` so tests can check the exact bus
traffic.
"""

import errno
from collections import deque

from .constants import NUNCHUCK_I2C_ADDRESS, OBFUSCATED_INIT_WRITES, PLAIN_INIT_WRITES, REQUEST_BYTE
from .protocol import obfuscate_byte

# Stick centred, accel 512/512/716, both buttons released.
# In obfuscated mode b5 (0x03) decodes to 0x103; bit 8 falls outside every b5 mask.
IDLE_FRAME = (0x80, 0x80, 0x80, 0x80, 0xB3, 0x03)

FAKE_HANDLE = 3
FAIL = -errno.EIO


class FakeTransport:
    def __init__(self, frames=None, *, fail_open=False, fail_register=None,
                 fail_request=False, fail_read_at=None, address=NUNCHUCK_I2C_ADDRESS):
        self.address = address
        self.fail_open = fail_open
        self.fail_register = fail_register
        self.fail_request = fail_request
        self.fail_read_at = fail_read_at

        self.ops = []
        self.encrypted = False
        self.closed = False
        self._frames = deque()
        self._current = []
        self._pos = 0
        for frame in frames or ():
            self.queue_frame(frame)

    def queue_frame(self, frame, encoded=False):
        """
        Queue a decoded frame; set encoded=True to queue raw wire bytes.

        In obfuscated mode a decoded frame is encoded with obfuscate_byte before
        it is served. The reader's decode is unmasked, so any byte below 0x17
        comes back as value + 0x100. Only bytes >= 0x17 round-trip exactly; for
        anything else queue the wire bytes with encoded=True.
        """
        self._frames.append((tuple(frame), encoded))

    def _latch(self):
        if self._frames:
            frame, encoded = self._frames.popleft()
        else:
            frame, encoded = IDLE_FRAME, False
        if self.encrypted and not encoded:
            frame = tuple(obfuscate_byte(b) for b in frame)
        self._current = list(frame)
        self._pos = 0

    # ---- I2CTransport ----
    def open(self, address):
        self.ops.append(("open", address))
        if self.fail_open or address != self.address:
            return FAIL
        return FAKE_HANDLE

    def write_register(self, handle, register, value):
        self.ops.append(("write_register", register, value))
        if register == self.fail_register:
            return FAIL
        if (register, value) in OBFUSCATED_INIT_WRITES:
            self.encrypted = True
        elif (register, value) in PLAIN_INIT_WRITES:
            self.encrypted = False
        return 0

    def write_byte(self, handle, value):
        self.ops.append(("write_byte", value))
        if self.fail_request:
            return FAIL
        if value == REQUEST_BYTE:
            self._latch()
        return 0

    def read_byte(self, handle):
        self.ops.append(("read_byte",))
        if self._pos == self.fail_read_at:
            return FAIL
        if self._pos >= len(self._current):
            self._latch()
        value = self._current[self._pos]
        self._pos += 1
        return value

    def close(self, handle):
        self.ops.append(("close", handle))
        self.closed = True

    # ---- helpers for tests ----
    def calls(self, name):
        return [op for op in self.ops if op[0] == name]
