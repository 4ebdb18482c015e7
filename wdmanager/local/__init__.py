"""
Local package for wdmanager.

This package holds the configuration value, platform detection and the
subsystems that manage artifacts on disk and the server process.
"""

from .config import ManagerConfig, load_config
from .platform_info import PlatformInfo, detect_platform

__all__ = ["ManagerConfig", "load_config", "PlatformInfo", "detect_platform"]
