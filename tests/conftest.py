"""
Shared fixtures: a scripted stand-in for the adb executable.
"""

import subprocess
from typing import Dict, List, Optional, Tuple, Union

import pytest

from android_devices.core.adb import ADBBridge, CommandRunner

Response = Union[bytes, Tuple[int, bytes], Exception]


class FakeADB:
    """
    Replays canned adb output keyed by argument tuple.

    Unknown commands exit with status 1, like adb does for a missing device.
    """

    def __init__(self, responses: Optional[Dict[Tuple[str, ...], Response]] = None, available: bool = True):
        self.responses: Dict[Tuple[str, ...], Response] = dict(responses or {})
        self.available = available
        self.calls: List[List[str]] = []
        self.merge_flags: List[bool] = []

    def which(self, name: str) -> Optional[str]:
        return f"/usr/bin/{name}" if self.available else None

    def __call__(self, cmd: List[str], merge_stderr: bool = True) -> subprocess.CompletedProcess:
        self.calls.append(list(cmd))
        self.merge_flags.append(merge_stderr)

        response = self.responses.get(tuple(cmd[1:]))
        if response is None:
            return subprocess.CompletedProcess(cmd, 1, b"error: device not found\n", b"")
        if isinstance(response, Exception):
            raise response
        if isinstance(response, tuple):
            returncode, stdout = response
            return subprocess.CompletedProcess(cmd, returncode, stdout, b"")
        return subprocess.CompletedProcess(cmd, 0, response, b"")

    def set_devices(self, output: str) -> None:
        self.responses[("devices", "-l")] = output.encode()

    def set_prop(self, device_id: str, key: str, value: Response) -> None:
        if isinstance(value, str):
            value = (value + "\n").encode()
        self.responses[("-s", device_id, "shell", "getprop", key)] = value

    def set_props(self, device_id: str, props: Dict[str, str]) -> None:
        for key, value in props.items():
            self.set_prop(device_id, key, value)

    def fail_prop(self, device_id: str, key: str) -> None:
        self.responses[("-s", device_id, "shell", "getprop", key)] = (1, b"error: closed\n")

    def getprop_keys(self, device_id: str) -> List[str]:
        """Property keys queried for a device, in call order"""
        return [c[5] for c in self.calls if c[1:5] == ["-s", device_id, "shell", "getprop"]]


EMULATOR_PROPS = {
    "ro.build.version.release": "11",
    "ro.build.version.sdk": "30",
    "ro.product.model": "sdk_gphone_x86",
    "ro.product.cpu.abi": "x86",
    "ro.product.brand": "Google",
    "ro.kernel.qemu": "1",
    "ro.boot.qemu.avd_name": "Pixel_2_API_30",
}

PHONE_PROPS = {
    "ro.build.version.release": "14",
    "ro.build.version.sdk": "34",
    "ro.product.model": "Pixel 7",
    "ro.product.cpu.abi": "arm64-v8a",
    "ro.product.brand": "google",
    "ro.kernel.qemu": "",
}


@pytest.fixture
def fake_adb():
    """adb with one booted emulator attached"""
    adb = FakeADB()
    adb.set_devices("List of devices attached\nemulator-5554\tdevice\n")
    adb.set_props("emulator-5554", EMULATOR_PROPS)
    return adb


@pytest.fixture
def runner(fake_adb):
    return CommandRunner(adb_path="adb", executor=fake_adb, which=fake_adb.which)


@pytest.fixture
def bridge(runner):
    return ADBBridge(runner=runner)
