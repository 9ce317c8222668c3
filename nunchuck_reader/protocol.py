"""
Wire format of the Nunchuck data frame.

Frame (6 bytes, after de-obfuscation when enabled):

    b0  joystick X
    b1  joystick Y
    b2  accel X bits 9..2
    b3  accel Y bits 9..2
    b4  accel Z bits 9..2
    b5  [ax1 ax0 ay1 ay0 az1 az0 C Z]
"""

from typing import Sequence

from .constants import (
    ACCEL_X_LOW_MASK,
    ACCEL_Y_LOW_MASK,
    ACCEL_Z_LOW_MASK,
    BUTTON_C_MASK,
    BUTTON_Z_MASK,
    FRAME_LENGTH,
    OBFUSCATION_KEY,
)
from .data import RawNunchuckData


def deobfuscate_byte(value: int) -> int:
    # No masking: results above 0xFF are kept as the device library computes them
    return (value ^ OBFUSCATION_KEY) + OBFUSCATION_KEY


def obfuscate_byte(value: int) -> int:
    """Wire-side inverse of deobfuscate_byte, as the device would send it"""
    return ((value - OBFUSCATION_KEY) & 0xFF) ^ OBFUSCATION_KEY


def parse_frame(frame: Sequence[int]) -> RawNunchuckData:
    if len(frame) != FRAME_LENGTH:
        raise ValueError(f"Expected a {FRAME_LENGTH}-byte frame, got {len(frame)} bytes")

    b0, b1, b2, b3, b4, b5 = frame

    accel_x = (b2 << 2) | ((b5 & ACCEL_X_LOW_MASK) >> 6)
    accel_y = (b3 << 2) | ((b5 & ACCEL_Y_LOW_MASK) >> 4)
    accel_z = (b4 << 2) | ((b5 & ACCEL_Z_LOW_MASK) >> 2)

    button_c = (b5 & BUTTON_C_MASK) >> 1
    button_z = b5 & BUTTON_Z_MASK

    return RawNunchuckData(b0, b1, accel_x, accel_y, accel_z, button_c, button_z)


def decode_frame(frame: Sequence[int], obfuscated: bool) -> RawNunchuckData:
    if obfuscated:
        frame = [deobfuscate_byte(b) for b in frame]
    return parse_frame(frame)
