"""
Decoded Nunchuck values.

``RawNunchuckData`` is the flat sample unpacked from one 6-byte frame.
``map_values`` groups it into joystick / accelerometer / button structures
without touching the numbers.

Button state is kept as the device reports it: 0 = pressed, 1 = released.
"""

from dataclasses import asdict, dataclass

from .constants import JOYSTICK_CENTER


@dataclass(frozen=True)
class RawNunchuckData:
    joystick_x: int
    joystick_y: int
    accel_x: int      # 10-bit, 0..1023
    accel_y: int
    accel_z: int
    button_c: int     # 0 = pressed
    button_z: int


@dataclass(frozen=True)
class Joystick:
    x: int
    y: int


@dataclass(frozen=True)
class Accelerometer:
    x: int
    y: int
    z: int


@dataclass(frozen=True)
class Button:
    state: int

    @property
    def pressed(self) -> bool:
        return self.state == 0


@dataclass(frozen=True)
class NunchuckData:
    joystick: Joystick
    accelerometer: Accelerometer
    button_c: Button
    button_z: Button

    def as_dict(self) -> dict:
        return {
            "joystick": asdict(self.joystick),
            "accelerometer": asdict(self.accelerometer),
            "button_c": {"pressed": self.button_c.pressed},
            "button_z": {"pressed": self.button_z.pressed},
        }


def map_values(raw: RawNunchuckData) -> NunchuckData:
    return NunchuckData(
        joystick=Joystick(raw.joystick_x, raw.joystick_y),
        accelerometer=Accelerometer(raw.accel_x, raw.accel_y, raw.accel_z),
        button_c=Button(raw.button_c),
        button_z=Button(raw.button_z),
    )


def joystick_direction(joystick: Joystick, threshold: int = 40) -> str:
    """Get joystick direction based on position (8-bit, centered on 128)"""
    x = joystick.x - JOYSTICK_CENTER
    y = joystick.y - JOYSTICK_CENTER
    if abs(x) < threshold and abs(y) < threshold:
        return "CENTER"
    elif abs(x) >= abs(y):
        return "RIGHT" if x > 0 else "LEFT"
    else:
        return "UP" if y > 0 else "DOWN"
