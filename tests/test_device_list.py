"""
Tests for `adb devices -l` parsing and device enumeration.
"""
import pytest

from android_devices.core.adb import CommandRunner, DeviceListBuilder, parse_device_lines
from android_devices.core.adb import DeviceDetailResolver, PropertyReader
from android_devices.models import Device
from android_devices.utils.error_handler import ExecutionFailedError, ToolNotFoundError
from tests.conftest import EMULATOR_PROPS, PHONE_PROPS, FakeADB


def make_builder(adb: FakeADB) -> DeviceListBuilder:
    runner = CommandRunner(executor=adb, which=adb.which)
    return DeviceListBuilder(runner, DeviceDetailResolver(PropertyReader(runner)))


class TestParseDeviceLines:
    def test_long_form_output(self):
        output = (
            b"List of devices attached\n"
            b"emulator-5554          device product:sdk_gphone_x86 model:sdk_gphone_x86 device:generic_x86 transport_id:1\n"
            b"28291FDH2001           unauthorized usb:1-1 transport_id:2\n"
            b"\n"
        )

        assert parse_device_lines(output) == [
            ("emulator-5554", "device"),
            ("28291FDH2001", "unauthorized"),
        ]

    def test_banner_and_blank_lines_anywhere(self):
        output = b"\n\nList of devices attached\n\n192.168.1.20:5555\toffline\n\n  \nList of devices attached\n"

        assert parse_device_lines(output) == [("192.168.1.20:5555", "offline")]

    def test_single_token_line_is_skipped(self):
        output = b"List of devices attached\nemulator-5554\nemulator-5556\tdevice\n"

        assert parse_device_lines(output) == [("emulator-5556", "device")]

    def test_crlf_line_endings(self):
        output = b"List of devices attached\r\nemulator-5554\tdevice\r\n"

        assert parse_device_lines(output) == [("emulator-5554", "device")]

    def test_empty_output(self):
        assert parse_device_lines(b"") == []
        assert parse_device_lines(b"List of devices attached\n\n") == []


class TestDeviceListBuilder:
    def test_single_emulator(self, fake_adb):
        devices = make_builder(fake_adb).list_devices()

        assert [d.model_dump() for d in devices] == [{
            "name": "Pixel 2 API 30",
            "device": "emulator-5554",
            "model": "sdk_gphone_x86",
            "arch": "x86",
            "android_version": "11",
            "sdk_level": "30",
            "run_status": "device",
        }]

    def test_devices_keep_output_order(self):
        adb = FakeADB()
        adb.set_devices(
            "List of devices attached\n"
            "zz-last-serial\tdevice\n"
            "emulator-5554\tdevice\n"
            "aa-first-serial\toffline\n"
        )
        adb.set_props("zz-last-serial", PHONE_PROPS)
        adb.set_props("emulator-5554", EMULATOR_PROPS)
        adb.set_props("aa-first-serial", PHONE_PROPS)

        devices = make_builder(adb).list_devices()

        assert [d.device for d in devices] == ["zz-last-serial", "emulator-5554", "aa-first-serial"]
        assert [d.run_status for d in devices] == ["device", "device", "offline"]

    def test_no_devices(self):
        adb = FakeADB()
        adb.set_devices("List of devices attached\n\n")

        assert make_builder(adb).list_devices() == []

    def test_detail_failure_keeps_device(self, fake_adb):
        fake_adb.set_devices("List of devices attached\nemulator-5554\tdevice\nR58M123ABC\tunauthorized\n")
        fake_adb.fail_prop("emulator-5554", "ro.product.cpu.abi")
        # R58M123ABC has no scripted properties: every query fails

        devices = make_builder(fake_adb).list_devices()

        assert devices == [
            Device(device="emulator-5554", run_status="device"),
            Device(device="R58M123ABC", run_status="unauthorized"),
        ]
        assert devices[0].name == ""
        assert devices[0].android_version == ""

    def test_one_failure_does_not_affect_others(self, fake_adb):
        fake_adb.set_devices("List of devices attached\nR58M123ABC\toffline\nemulator-5554\tdevice\n")

        devices = make_builder(fake_adb).list_devices()

        assert devices[0] == Device(device="R58M123ABC", run_status="offline")
        assert devices[1].name == "Pixel 2 API 30"

    def test_adb_missing(self):
        adb = FakeADB(available=False)

        with pytest.raises(ToolNotFoundError):
            make_builder(adb).list_devices()
        assert adb.calls == []

    def test_devices_command_failure(self):
        adb = FakeADB({("devices", "-l"): (1, b"* daemon not running; starting now\nerror: cannot connect to daemon\n")})

        with pytest.raises(ExecutionFailedError) as exc_info:
            make_builder(adb).list_devices()

        assert "cannot connect to daemon" in str(exc_info.value)

    def test_list_is_rebuilt_every_call(self, fake_adb):
        builder = make_builder(fake_adb)
        first = builder.list_devices()

        fake_adb.set_devices("List of devices attached\n")
        assert builder.list_devices() == []
        assert len(first) == 1
