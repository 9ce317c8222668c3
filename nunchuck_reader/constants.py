"""
Fixed protocol constants for the Nunchuck over I2C.
"""

# ========= Bus =========
I2C_BUS = 1                  # Default I2C bus on Raspberry Pi
NUNCHUCK_I2C_ADDRESS = 0x52

# ========= Timing (microseconds) =========
MINIMUM_ADAPTATION_DELAY_US = 300   # below this the device returns stale data
DEFAULT_ADAPTATION_DELAY_US = 500

# ========= Initialization =========
# Obfuscated ("encrypted") mode: single register write
OBFUSCATED_INIT_WRITES = ((0x40, 0x00),)
# Plain mode: disable encryption, order matters
PLAIN_INIT_WRITES = ((0xF0, 0x55), (0xFB, 0x00))

# ========= Read cycle =========
REQUEST_BYTE = 0x00          # latches a new sample
FRAME_LENGTH = 6             # jx, jy, ax, ay, az, packed low bits + buttons
OBFUSCATION_KEY = 0x17

# ========= Frame byte 5 masks =========
ACCEL_X_LOW_MASK = 0xC0
ACCEL_Y_LOW_MASK = 0x30
ACCEL_Z_LOW_MASK = 0x0C
BUTTON_C_MASK = 0x02
BUTTON_Z_MASK = 0x01

JOYSTICK_CENTER = 128
