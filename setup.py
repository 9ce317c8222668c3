from setuptools import setup, find_packages
import os
from glob import glob

package_name = 'nunchuck_reader'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test']),
    data_files=[
        ('share/' + package_name, ['package.xml']),
        (os.path.join('share', package_name, 'launch'), glob('launch/*.py')),
    ],
    install_requires=['setuptools', 'smbus2'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='User',
    maintainer_email='user@example.com',
    description='Wii Nunchuck I2C reader and ROS2 publisher',
    license='MIT',
    tests_require=['pytest'],
    python_requires='>=3.8',
    entry_points={
        'console_scripts': [
            'nunchuck_read = nunchuck_reader.cli:main',
            'nunchuck_publisher = nunchuck_reader.ros_publisher:main',
        ],
    },
)
