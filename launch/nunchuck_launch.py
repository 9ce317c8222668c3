from launch import LaunchDescription
from launch_ros.actions import Node
from launch.substitutions import LaunchConfiguration
from launch.actions import DeclareLaunchArgument

def generate_launch_description():
    return LaunchDescription([
        DeclareLaunchArgument(
            'mode',
            default_value='plain',
            description='Nunchuck initialization mode (plain or obfuscated)'
        ),
        DeclareLaunchArgument(
            'publish_rate',
            default_value='50',
            description='Publish rate (Hz)'
        ),

        Node(
            package='nunchuck_reader',
            executable='nunchuck_publisher',
            name='nunchuck_publisher',
            parameters=[{
                'i2c_bus': 1,
                'mode': LaunchConfiguration('mode'),
                'adaptation_delay_us': 500,
                'publish_rate': LaunchConfiguration('publish_rate'),
                'frame_id': 'nunchuck_link',
                'joy_topic': '/nunchuck/joy',
                'accel_topic': '/nunchuck/accel',
                'debug': False
            }],
            output='screen'
        )
    ])
