"""
API Routes Package

Routers reach shared services through get_deps(); the server installs them
with set_deps() at startup.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.adb import ADBBridge


@dataclass
class RouteDependencies:
    """Services shared by all routers"""
    adb_bridge: Optional[ADBBridge] = None


_deps = RouteDependencies()


def set_deps(adb_bridge: ADBBridge) -> RouteDependencies:
    """Install route dependencies"""
    _deps.adb_bridge = adb_bridge
    return _deps


def get_deps() -> RouteDependencies:
    """Get route dependencies"""
    return _deps
