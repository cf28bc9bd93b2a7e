"""
ADB Package - device enumeration, property reading and screenshot capture
"""
from .command_runner import CommandRunner, subprocess_executor
from .properties import PropertyReader, DeviceDetailResolver
from .device_list import DeviceListBuilder, parse_device_lines
from .screenshot import ScreenshotCapturer
from .adb_bridge import ADBBridge

__all__ = [
    'CommandRunner',
    'subprocess_executor',
    'PropertyReader',
    'DeviceDetailResolver',
    'DeviceListBuilder',
    'parse_device_lines',
    'ScreenshotCapturer',
    'ADBBridge',
]
