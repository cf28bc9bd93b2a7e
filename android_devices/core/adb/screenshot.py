"""
Android Devices Bridge - Screenshot Capture

Streams a PNG straight from the device with `adb exec-out screencap -p`
(no temporary file on the device) and encodes it as base64.
"""

import base64
import logging

from .command_runner import CommandRunner
from ...utils.error_handler import CaptureFailedError, ExecutionFailedError

logger = logging.getLogger(__name__)


class ScreenshotCapturer:
    """Captures screenshots; the device id is not validated before adb runs"""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def capture_bytes(self, device_id: str) -> bytes:
        """
        Capture raw PNG bytes exactly as adb emitted them.

        Raises:
            ToolNotFoundError: adb is not on the search path
            CaptureFailedError: adb failed or returned nothing
        """
        self.runner.ensure_available()
        try:
            # stderr kept apart so warnings never end up inside the image
            data = self.runner.run(
                ["-s", device_id, "exec-out", "screencap", "-p"],
                merge_stderr=False,
            )
        except ExecutionFailedError as e:
            logger.warning(f"[Screenshot] capture failed for {device_id}: {e}")
            raise CaptureFailedError(device_id, e) from e

        if not data:
            raise CaptureFailedError(device_id, "no image data")

        logger.debug(f"[Screenshot] {device_id}: {len(data)} bytes")
        return data

    def capture(self, device_id: str) -> str:
        """Capture a screenshot and return it as standard base64 text."""
        return base64.b64encode(self.capture_bytes(device_id)).decode("ascii")
