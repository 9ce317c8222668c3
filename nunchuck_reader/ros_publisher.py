#!/usr/bin/env python3
"""
ROS2 publisher for the Nunchuck.

Publishes:
- /nunchuck/joy:   sensor_msgs/Joy (axes = joystick x, y; buttons = C, Z pressed)
- /nunchuck/accel: geometry_msgs/Vector3Stamped (raw 10-bit accelerometer counts)
"""

import signal
import sys
import time

try:
    import rclpy
    from rclpy.node import Node
    from sensor_msgs.msg import Joy
    from geometry_msgs.msg import Vector3Stamped
    from std_msgs.msg import Header
except ImportError:
    print("ROS2 not available. Please install ROS2 Jazzy.")
    sys.exit(1)

from .config import ReaderConfig, check_publish_rate, parse_mode
from .constants import DEFAULT_ADAPTATION_DELAY_US, I2C_BUS
from .errors import NunchuckError
from .reader import NunchuckReader


class NunchuckPublisher(Node):
    def __init__(self):
        super().__init__('nunchuck_publisher')

        self.declare_parameter('i2c_bus', I2C_BUS)
        self.declare_parameter('mode', 'plain')
        self.declare_parameter('adaptation_delay_us', DEFAULT_ADAPTATION_DELAY_US)
        self.declare_parameter('publish_rate', 50)
        self.declare_parameter('frame_id', 'nunchuck_link')
        self.declare_parameter('joy_topic', '/nunchuck/joy')
        self.declare_parameter('accel_topic', '/nunchuck/accel')
        self.declare_parameter('debug', False)

        self.frame_id = self.get_parameter('frame_id').value
        self.publish_rate = self.get_parameter('publish_rate').value
        joy_topic = self.get_parameter('joy_topic').value
        accel_topic = self.get_parameter('accel_topic').value

        self.joy_pub = self.create_publisher(Joy, joy_topic, 10)
        self.accel_pub = self.create_publisher(Vector3Stamped, accel_topic, 10)

        self.reader = None
        try:
            check_publish_rate(self.publish_rate)
        except NunchuckError as e:
            self.get_logger().error(f"Invalid publish_rate parameter: {e}")
            return

        if not self.init_reader():
            self.get_logger().error("Failed to initialize Nunchuck")
            return

        self.timer = self.create_timer(1.0 / self.publish_rate, self.publish_data)

        self.get_logger().info(f"Nunchuck publisher started ({self.reader})")
        self.get_logger().info(f"Publishing at {self.publish_rate} Hz")
        self.get_logger().info(f"Topics: {joy_topic}, {accel_topic}")

    def init_reader(self):
        """Open the Nunchuck with the node parameters"""
        try:
            config = ReaderConfig(
                mode=parse_mode(self.get_parameter('mode').value),
                adaptation_delay_us=self.get_parameter('adaptation_delay_us').value,
                i2c_bus=self.get_parameter('i2c_bus').value,
                debug=self.get_parameter('debug').value,
            )
            self.reader = NunchuckReader.from_config(config)
            return True
        except NunchuckError as e:
            self.get_logger().error(f"Nunchuck initialization failed [{e.kind.value}]: {e}")
            return False

    def publish_data(self):
        """Read one sample and publish it"""
        if self.reader is None or self.reader.closed:
            return

        result = self.reader.try_read_values()
        if not result.ok:
            self.get_logger().warn(f"Nunchuck read error: {result.error}")
            return
        data = result.value

        header = Header()
        header.stamp = self.get_clock().now().to_msg()
        header.frame_id = self.frame_id

        joy_msg = Joy()
        joy_msg.header = header
        joy_msg.axes = [float(data.joystick.x), float(data.joystick.y)]
        joy_msg.buttons = [int(data.button_c.pressed), int(data.button_z.pressed)]
        self.joy_pub.publish(joy_msg)

        accel_msg = Vector3Stamped()
        accel_msg.header = header
        accel_msg.vector.x = float(data.accelerometer.x)
        accel_msg.vector.y = float(data.accelerometer.y)
        accel_msg.vector.z = float(data.accelerometer.z)
        self.accel_pub.publish(accel_msg)

        # Log a sample about once a second
        now = time.time()
        if now - getattr(self, '_last_log_time', 0.0) > 1.0:
            self.get_logger().info(
                f"Joy: x={data.joystick.x} y={data.joystick.y} "
                f"C={data.button_c.pressed} Z={data.button_z.pressed} | "
                f"Accel: x={data.accelerometer.x} y={data.accelerometer.y} z={data.accelerometer.z}"
            )
            self._last_log_time = now

    def shutdown(self):
        """Clean shutdown"""
        self.get_logger().info("Shutting down Nunchuck publisher...")
        if self.reader is not None:
            self.reader.close()


def main():
    """Main entry point"""
    rclpy.init()
    publisher = None

    try:
        publisher = NunchuckPublisher()

        def signal_handler(sig, frame):
            print("\nReceived shutdown signal...")
            raise KeyboardInterrupt

        signal.signal(signal.SIGTERM, signal_handler)

        rclpy.spin(publisher)

    except KeyboardInterrupt:
        print("\nKeyboard interrupt received...")
    finally:
        if publisher is not None:
            publisher.shutdown()
            publisher.destroy_node()
        if rclpy.ok():
            rclpy.shutdown()


if __name__ == "__main__":
    main()
