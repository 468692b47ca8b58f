"""
Collaborators the client reaches through narrow interfaces:
storage for super properties, device metadata and HTTP transport.
"""

from .device import DeviceInfo
from .storage import MemoryStorage, RedisStorage, Storage
from .transport import HttpTransport

__all__ = ['DeviceInfo', 'MemoryStorage', 'RedisStorage', 'Storage', 'HttpTransport']
