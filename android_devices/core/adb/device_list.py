"""
Android Devices Bridge - Device List

Parses `adb devices -l` and resolves details for every listed device.
"""

import logging
from typing import List, Tuple

from .command_runner import CommandRunner
from .properties import DeviceDetailResolver
from ...models import Device
from ...utils.error_handler import BridgeError

logger = logging.getLogger(__name__)

BANNER_PREFIX = "List of devices"


def parse_device_lines(output: bytes) -> List[Tuple[str, str]]:
    """
    Parse `adb devices -l` output into (serial, state) pairs.

    Format: "emulator-5554  device product:sdk_gphone_x86 model:... transport_id:1"
    The banner, blank lines and lines with fewer than two fields are skipped.
    """
    text = output.decode("utf-8", errors="replace") if isinstance(output, bytes) else output
    entries = []
    for line in text.strip().splitlines():
        line = line.strip()
        if not line or line.startswith(BANNER_PREFIX):
            continue

        parts = line.split()
        if len(parts) < 2:
            continue

        entries.append((parts[0], parts[1]))
    return entries


class DeviceListBuilder:
    """Enumerates devices; a device whose details fail is kept with serial and state only"""

    def __init__(self, runner: CommandRunner, resolver: DeviceDetailResolver):
        self.runner = runner
        self.resolver = resolver

    def list_devices(self) -> List[Device]:
        """
        Get all devices known to adb, in the order adb lists them.

        Raises:
            ToolNotFoundError: adb is not on the search path
            ExecutionFailedError: `adb devices -l` failed
        """
        self.runner.ensure_available()
        output = self.runner.run(["devices", "-l"])

        devices = []
        for device_id, run_status in parse_device_lines(output):
            try:
                details = self.resolver.resolve(device_id)
            except BridgeError as e:
                logger.warning(f"[DeviceList] Failed to get details for device {device_id}: {e}")
                devices.append(Device(device=device_id, run_status=run_status))
                continue

            devices.append(Device(
                name=details.name,
                device=device_id,
                model=details.model,
                arch=details.arch,
                android_version=details.android_version,
                sdk_level=details.sdk_level,
                run_status=run_status,
            ))

        logger.info(f"[DeviceList] Found {len(devices)} device(s)")
        return devices
