"""
Android Devices Bridge - Models

Pydantic models for discovered devices and published tool descriptors.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Device(BaseModel):
    """One Android device or emulator as reported by adb"""
    model_config = ConfigDict(frozen=True)

    name: str = ""  # Display name (AVD name or "brand model")
    device: str = Field(..., min_length=1)  # adb serial, e.g. emulator-5554
    model: str = ""
    arch: str = ""  # CPU ABI
    android_version: str = ""
    sdk_level: str = ""
    run_status: str = Field(..., min_length=1)  # device / offline / unauthorized


class DeviceDetails(BaseModel):
    """Properties resolved for a single device"""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    android_version: str = ""
    sdk_level: str = ""
    model: str = ""
    arch: str = ""


class ToolDescriptor(BaseModel):
    """Tool published over tools/list"""
    name: str
    description: str
    inputSchema: Dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )


class DevicesRequest(BaseModel):
    """Body of POST /devices; unknown keys are ignored"""
    model_config = ConfigDict(extra="ignore")

    tool: Optional[str] = None


GET_ANDROID_DEVICES = "get_android_devices"
GET_ANDROID_SCREEN = "get_android_screen"

TOOLS: List[ToolDescriptor] = [
    ToolDescriptor(
        name=GET_ANDROID_DEVICES,
        description="Get a list of connected Android devices and emulators",
    ),
    ToolDescriptor(
        name=GET_ANDROID_SCREEN,
        description="Capture a screenshot from an Android device",
        inputSchema={
            "type": "object",
            "properties": {
                "device": {
                    "type": "string",
                    "description": "Device name/serial (e.g., 'emulator-5554'). If not provided, uses the first available device.",
                },
            },
        },
    ),
]


def tool_list() -> List[Dict[str, Any]]:
    """Serialized tool descriptors"""
    return [tool.model_dump() for tool in TOOLS]
