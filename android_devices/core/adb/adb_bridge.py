"""
Android Devices Bridge - ADB Bridge

Single entry point shared by the HTTP server and the JSON-RPC stdio server.
Every call enumerates from scratch; nothing is cached between requests.
"""

import logging
from typing import List, Optional

from .command_runner import CommandRunner
from .device_list import DeviceListBuilder
from .properties import DeviceDetailResolver, PropertyReader
from .screenshot import ScreenshotCapturer
from ...models import Device
from ...utils.error_handler import DeviceNotFoundError, ToolNotFoundError

logger = logging.getLogger(__name__)


class ADBBridge:
    """
    Android Debug Bridge facade.

    Handles device enumeration and screenshot capture. All calls block
    until adb returns.
    """

    def __init__(self, runner: Optional[CommandRunner] = None, adb_path: str = "adb"):
        self.runner = runner or CommandRunner(adb_path=adb_path)
        self.reader = PropertyReader(self.runner)
        self.resolver = DeviceDetailResolver(self.reader)
        self.device_list = DeviceListBuilder(self.runner, self.resolver)
        self.screenshots = ScreenshotCapturer(self.runner)
        logger.info(f"[ADBBridge] Initialized (adb={self.runner.adb_path})")

    def is_available(self) -> bool:
        """True when the adb executable can be resolved"""
        try:
            self.runner.ensure_available()
            return True
        except ToolNotFoundError:
            return False

    def list_devices(self) -> List[Device]:
        """Get connected devices and emulators with their details"""
        return self.device_list.list_devices()

    def resolve_device_id(self, device_id: Optional[str] = None) -> str:
        """
        Return device_id, or the first listed device when none is given.

        Raises:
            DeviceNotFoundError: No device id given and adb lists no devices
        """
        if device_id:
            return device_id

        devices = self.list_devices()
        if not devices:
            raise DeviceNotFoundError()

        logger.debug(f"[ADBBridge] No device given, using {devices[0].device}")
        return devices[0].device

    def capture_screenshot(self, device_id: Optional[str] = None) -> str:
        """Capture a screenshot as base64 PNG (defaults to the first device)"""
        return self.screenshots.capture(self.resolve_device_id(device_id))

    def capture_screenshot_bytes(self, device_id: Optional[str] = None) -> bytes:
        """Capture a screenshot as raw PNG bytes (defaults to the first device)"""
        return self.screenshots.capture_bytes(self.resolve_device_id(device_id))
