"""
Android Devices Bridge - Configuration

Settings are loaded from the environment; entry points may override them
from the command line.
"""

import logging
import os

ADB_PATH = os.getenv("ADB_PATH", "adb")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOG_FORMAT = '[%(asctime)s] %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

SERVER_NAME = "android-devices-mcp-server"
SERVER_VERSION = "1.0.0"
PROTOCOL_VERSION = "2024-11-05"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging. Always writes to stderr (stdout carries JSON-RPC)."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
