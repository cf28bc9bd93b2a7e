"""
Android Devices Bridge

Lists Android devices/emulators known to adb and captures their screens,
over JSON-RPC on stdio and over HTTP.
"""
from .core.adb import ADBBridge
from .models import Device

__all__ = ['ADBBridge', 'Device']

__version__ = '1.0.0'
