"""
Centralized Error Handling Module for Android Devices Bridge

Provides the bridge error taxonomy, consistent error responses and logging
for both transports (HTTP and JSON-RPC over stdio).
"""

import logging
import traceback
from typing import Dict, Any, Optional, Sequence
from fastapi import status
from fastapi.responses import JSONResponse

logger = logging.getLogger("android_devices")


class BridgeError(Exception):
    """Base exception for all bridge errors"""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ToolNotFoundError(BridgeError):
    """Raised when the adb executable cannot be located on the search path"""

    def __init__(self, tool: str, reason: Optional[str] = None):
        message = f"{tool} command not found"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, code="TOOL_NOT_FOUND", details={"tool": tool})


class ExecutionFailedError(BridgeError):
    """Raised when an adb invocation exits non-zero or cannot be started"""

    def __init__(
        self,
        command: Sequence[str],
        exit_code: Optional[int],
        output: bytes = b"",
        reason: Optional[str] = None,
        code: str = "EXECUTION_FAILED",
        message: Optional[str] = None,
    ):
        self.command = list(command)
        self.exit_code = exit_code
        self.output = output or b""
        text = self.output.decode("utf-8", errors="replace").strip()

        if message is None:
            if exit_code is None:
                message = f"error running adb command {' '.join(self.command)}: {reason or 'could not start'}"
            else:
                message = f"error running adb command {' '.join(self.command)}: exit status {exit_code}"
            if text:
                message = f"{message}, output: {text}"

        super().__init__(
            message,
            code=code,
            details={"command": self.command, "exit_code": exit_code, "output": text},
        )


class PropertyQueryError(ExecutionFailedError):
    """Raised when a single getprop query fails; keeps the runner's failure intact"""

    def __init__(self, device_id: str, prop: str, cause: ExecutionFailedError):
        self.device_id = device_id
        self.prop = prop
        self.cause = cause
        super().__init__(
            cause.command,
            cause.exit_code,
            cause.output,
            code="PROPERTY_QUERY_FAILED",
            message=f"failed to read property {prop} on {device_id}: {cause.message}",
        )
        self.details.update({"device_id": device_id, "property": prop})


class CaptureFailedError(BridgeError):
    """Raised when screenshot capture fails"""

    def __init__(self, device_id: str, cause: Any):
        self.device_id = device_id
        self.cause = cause
        super().__init__(
            f"failed to capture screenshot from device {device_id}: {cause}",
            code="CAPTURE_FAILED",
            details={"device_id": device_id, "cause": str(cause)},
        )


class DeviceNotFoundError(BridgeError):
    """Raised when no Android device is available"""

    def __init__(self, device_id: Optional[str] = None):
        message = (
            f"Device '{device_id}' not found or disconnected"
            if device_id
            else "No Android devices found"
        )
        super().__init__(
            message, code="DEVICE_NOT_FOUND", details={"device_id": device_id}
        )


class InvalidRequestError(BridgeError):
    """Raised when an HTTP request body cannot be understood"""

    def __init__(self, message: str, code: str = "INVALID_REQUEST"):
        super().__init__(message, code=code)


def error_payload(error: Exception) -> Dict[str, Any]:
    """
    Machine-readable description of an error, shared by both transports.

    Returns:
        Dict with message, type, code and details
    """
    payload = {"message": str(error), "type": error.__class__.__name__}
    if isinstance(error, BridgeError):
        payload["code"] = error.code
        payload["details"] = error.details
    else:
        payload["code"] = "UNKNOWN_ERROR"
        payload["details"] = {}
    return payload


def create_error_response(
    error: Exception,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    include_traceback: bool = False,
) -> JSONResponse:
    """
    Create a standardized error response

    Args:
        error: The exception that occurred
        status_code: HTTP status code
        include_traceback: Include full traceback in response (debug only)

    Returns:
        JSONResponse with error details
    """
    error_response = {"success": False, "error": error_payload(error)}

    if include_traceback:
        error_response["error"]["traceback"] = traceback.format_exc()

    logger.error(f"{error.__class__.__name__}: {error}")

    return JSONResponse(status_code=status_code, content=error_response)


def handle_api_error(error: Exception) -> JSONResponse:
    """
    Handle API errors with appropriate status codes

    Args:
        error: The exception to handle

    Returns:
        JSONResponse with appropriate status code
    """
    if isinstance(error, InvalidRequestError):
        return create_error_response(error, status.HTTP_400_BAD_REQUEST)

    elif isinstance(error, DeviceNotFoundError):
        return create_error_response(error, status.HTTP_404_NOT_FOUND)

    elif isinstance(error, ToolNotFoundError):
        return create_error_response(error, status.HTTP_503_SERVICE_UNAVAILABLE)

    else:
        return create_error_response(error, status.HTTP_500_INTERNAL_SERVER_ERROR)
