"""
Device Routes - Device Listing and Screenshots

Provides the tool-style device list endpoint (POST /devices), the tool
listing, and raw PNG screenshots.
"""

import asyncio
import logging
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response
from pydantic import ValidationError
from . import get_deps
from ..models import DevicesRequest, GET_ANDROID_DEVICES, tool_list
from ..utils.error_handler import BridgeError, InvalidRequestError, handle_api_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["devices"])


def _bridge():
    deps = get_deps()
    if not deps.adb_bridge:
        raise HTTPException(status_code=503, detail="ADB Bridge not initialized")
    return deps.adb_bridge


async def _parse_devices_request(request: Request) -> DevicesRequest:
    try:
        body = await request.json()
    except ValueError:
        raise InvalidRequestError("Invalid request body")

    if not isinstance(body, dict):
        raise InvalidRequestError("Invalid request body")

    try:
        return DevicesRequest.model_validate(body)
    except ValidationError:
        raise InvalidRequestError("Invalid request body")


@router.post("/devices")
async def list_devices(request: Request):
    """
    List connected Android devices and emulators.

    Body: {"tool": "get_android_devices"}; any other key is ignored.
    Returns a JSON array of devices.
    """
    bridge = _bridge()
    try:
        payload = await _parse_devices_request(request)
        if payload.tool != GET_ANDROID_DEVICES:
            raise InvalidRequestError(f"Unknown tool: {payload.tool}", code="UNKNOWN_TOOL")

        logger.info("[API] Listing devices")
        devices = await asyncio.to_thread(bridge.list_devices)
        return [device.model_dump() for device in devices]
    except BridgeError as e:
        return handle_api_error(e)


@router.get("/tools")
async def list_tools():
    """Tools this server publishes"""
    return {"tools": tool_list()}


@router.get("/api/devices/{device_id}/screenshot")
async def get_screenshot(device_id: str):
    """Capture a screenshot from a device as raw PNG"""
    bridge = _bridge()
    try:
        logger.info(f"[API] Capturing screenshot from {device_id}")
        data = await asyncio.to_thread(bridge.capture_screenshot_bytes, device_id)
        return Response(content=data, media_type="image/png")
    except BridgeError as e:
        return handle_api_error(e)
