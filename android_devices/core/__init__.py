"""
Core Package
"""
from .adb import ADBBridge

__all__ = ['ADBBridge']
