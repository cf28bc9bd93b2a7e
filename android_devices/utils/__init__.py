"""
Shared utilities (error taxonomy and response helpers)
"""
from .error_handler import (
    BridgeError,
    ToolNotFoundError,
    ExecutionFailedError,
    PropertyQueryError,
    CaptureFailedError,
    DeviceNotFoundError,
    InvalidRequestError,
    error_payload,
    handle_api_error,
)

__all__ = [
    'BridgeError',
    'ToolNotFoundError',
    'ExecutionFailedError',
    'PropertyQueryError',
    'CaptureFailedError',
    'DeviceNotFoundError',
    'InvalidRequestError',
    'error_payload',
    'handle_api_error',
]
