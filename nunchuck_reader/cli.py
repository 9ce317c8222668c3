#!/usr/bin/env python3
"""
Nunchuck console reader.

Polls the Nunchuck over I2C and prints joystick, accelerometer and button
state. Use --mock to run without hardware.
"""

import argparse
import json
import signal
import sys
import time

from .config import ReaderConfig, parse_mode
from .constants import DEFAULT_ADAPTATION_DELAY_US, I2C_BUS
from .data import joystick_direction
from .errors import ConfigurationError, DeviceReadError, DeviceUnavailableError
from .mock_transport import FakeTransport
from .reader import NunchuckReader


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Read a Nunchuck over I2C")
    p.add_argument("--mode", choices=["plain", "obfuscated"], default="plain", help="Initialization mode")
    p.add_argument("--delay-us", type=int, default=DEFAULT_ADAPTATION_DELAY_US,
                   help="Circuit adaptation wait in microseconds (>= 300)")
    p.add_argument("--bus", type=int, default=I2C_BUS, help="I2C bus number")
    p.add_argument("--hz", type=float, default=20.0, help="Polling rate")
    p.add_argument("--count", type=int, default=0, help="Number of samples (0 = until Ctrl+C)")
    p.add_argument("--json", action="store_true", help="Print one JSON object per sample")
    p.add_argument("--mock", action="store_true", help="Use the in-memory device instead of the bus")
    p.add_argument("--debug", action="store_true", help="Print every I2C transaction")
    args = p.parse_args(argv)
    if not args.hz > 0:
        p.error(f"--hz must be greater than 0, got {args.hz}")
    return args


def format_sample(data) -> str:
    js, acc = data.joystick, data.accelerometer
    direction = joystick_direction(js)
    c = "PRESSED" if data.button_c.pressed else "released"
    z = "PRESSED" if data.button_z.pressed else "released"
    return (f"JX={js.x:3d} JY={js.y:3d} Dir={direction:6s}  "
            f"AX={acc.x:4d} AY={acc.y:4d} AZ={acc.z:4d}  C={c:8s} Z={z}")


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = ReaderConfig(mode=parse_mode(args.mode), adaptation_delay_us=args.delay_us,
                              i2c_bus=args.bus, debug=args.debug)
        transport = FakeTransport() if args.mock else None
        reader = NunchuckReader.from_config(config, transport=transport)
    except (ConfigurationError, DeviceUnavailableError) as e:
        print(f"[ERROR] {e}")
        return 1

    def handle_sigterm(sig, frame):
        raise KeyboardInterrupt

    prev_sigterm = signal.signal(signal.SIGTERM, handle_sigterm)

    print(f"[READY] {reader} on bus {args.bus}{' (mock)' if args.mock else ''}. Ctrl-C to exit.")

    period = 1.0 / args.hz
    n = 0
    try:
        while args.count <= 0 or n < args.count:
            try:
                data = reader.read_values()
            except DeviceReadError as e:
                print(f"[WARN ] {e}")
            else:
                if args.json:
                    print(json.dumps(data.as_dict()))
                else:
                    print(format_sample(data))
            n += 1
            if args.count <= 0 or n < args.count:
                time.sleep(period)
    except KeyboardInterrupt:
        print("\n[EXIT] Stopping...")
    finally:
        reader.close()
        signal.signal(signal.SIGTERM, prev_sigterm)
    return 0


if __name__ == "__main__":
    sys.exit(main())
