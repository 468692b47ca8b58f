"""Device and application metadata provider."""

import platform
import socket
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import requests

IOS = "ios"
DEFAULT_PLATFORM_TAG = "android"


@dataclass
class DeviceInfo:
    """
    Plain device/app metadata, read once by the client.

    Hosts fill in what they know; anything left as None is omitted from
    event payloads. Subclasses may override the ``get_*`` methods to compute
    values lazily (the client calls them during ``init()``).
    """

    app_build_number: Optional[str] = None
    app_id: Optional[str] = None
    app_name: Optional[str] = None
    app_version_string: Optional[str] = None
    device_name: Optional[str] = None
    app_ownership: Optional[str] = None
    os_name: Optional[str] = None
    os_version: Optional[str] = None
    screen_width: int = 0
    screen_height: int = 0
    user_agent: Optional[str] = None
    model_id: Optional[str] = None
    model_name: Optional[str] = None
    platform_tag: str = DEFAULT_PLATFORM_TAG

    def constants(self) -> Dict[str, Any]:
        """Metadata known at construction time."""
        return {
            "app_build_number": self.app_build_number,
            "app_id": self.app_id,
            "app_name": self.app_name,
            "app_version_string": self.app_version_string,
            "device_name": self.device_name,
            "expo_app_ownership": self.app_ownership or None,
            "os_version": self.os_version,
        }

    def get_user_agent(self) -> Optional[str]:
        return self.user_agent

    def get_window_size(self) -> Tuple[int, int]:
        return self.screen_width, self.screen_height

    def is_ios(self) -> bool:
        return (self.os_name or "").lower() == IOS

    @classmethod
    def from_host(cls, **overrides: Any) -> 'DeviceInfo':
        """Describe the machine the Python process runs on."""
        values: Dict[str, Any] = {
            "device_name": socket.gethostname() or None,
            "os_name": platform.system().lower() or None,
            "os_version": platform.release() or None,
            "user_agent": requests.utils.default_user_agent(),
            "model_id": platform.machine() or None,
            "platform_tag": platform.system().lower() or DEFAULT_PLATFORM_TAG,
        }
        values.update(overrides)
        return cls(**values)
