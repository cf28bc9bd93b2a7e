"""
Android Devices Bridge - Device Properties

Reads getprop values from a device and assembles the per-device details
(display name, Android version, SDK level, model, CPU ABI).
"""

import logging

from .command_runner import CommandRunner
from ...models import DeviceDetails
from ...utils.error_handler import ExecutionFailedError, PropertyQueryError

logger = logging.getLogger(__name__)

PROP_IS_EMULATOR = "ro.kernel.qemu"
PROP_AVD_NAME = "ro.boot.qemu.avd_name"
PROP_BRAND = "ro.product.brand"
PROP_MODEL = "ro.product.model"
PROP_ANDROID_VERSION = "ro.build.version.release"
PROP_SDK_LEVEL = "ro.build.version.sdk"
PROP_ARCH = "ro.product.cpu.abi"


class PropertyReader:
    """Reads a single system property through `adb shell getprop`"""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def read(self, device_id: str, key: str) -> str:
        """
        Read one property from a device.

        Returns:
            Property value with surrounding whitespace removed

        Raises:
            PropertyQueryError: The adb invocation failed
        """
        try:
            output = self.runner.run(["-s", device_id, "shell", "getprop", key])
        except ExecutionFailedError as e:
            raise PropertyQueryError(device_id, key, e) from e
        return output.decode("utf-8", errors="replace").strip()


class DeviceDetailResolver:
    """
    Builds DeviceDetails for one device.

    Name precedence: AVD name for emulators (underscores shown as spaces),
    otherwise "brand model". A failing emulator flag, brand, model or any of
    the four trailing properties aborts resolution; a failing AVD name only
    falls back to brand/model.
    """

    def __init__(self, reader: PropertyReader):
        self.reader = reader

    def is_emulator(self, device_id: str) -> bool:
        return self.reader.read(device_id, PROP_IS_EMULATOR) == "1"

    def display_name(self, device_id: str, emulator: bool) -> str:
        name = ""
        if emulator:
            try:
                name = self.reader.read(device_id, PROP_AVD_NAME).replace("_", " ")
            except PropertyQueryError as e:
                logger.warning(f"[DeviceDetails] failed to get avd name for device {device_id}: {e}")

        if not name:
            brand = self.reader.read(device_id, PROP_BRAND)
            model = self.reader.read(device_id, PROP_MODEL)
            name = f"{brand} {model}"
        return name

    def resolve(self, device_id: str) -> DeviceDetails:
        """
        Resolve all details for a device. Queries run one after another.

        Raises:
            PropertyQueryError: A non-optional property could not be read
        """
        emulator = self.is_emulator(device_id)
        name = self.display_name(device_id, emulator)

        android_version = self.reader.read(device_id, PROP_ANDROID_VERSION)
        sdk_level = self.reader.read(device_id, PROP_SDK_LEVEL)
        model = self.reader.read(device_id, PROP_MODEL)
        arch = self.reader.read(device_id, PROP_ARCH)

        logger.debug(f"[DeviceDetails] {device_id}: {name} (Android {android_version}, SDK {sdk_level})")
        return DeviceDetails(
            name=name,
            android_version=android_version,
            sdk_level=sdk_level,
            model=model,
            arch=arch,
        )
