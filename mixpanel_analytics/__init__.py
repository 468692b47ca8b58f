"""
Mixpanel Analytics - lightweight client for the Mixpanel HTTP API

Tracks events and profile updates, keeps super properties across sessions,
and sends everything as fire-and-forget GET requests.
"""

from .analytics import Endpoint, Event, MixpanelAnalytics, PeopleOperation
from .config import AnalyticsConfig, ClientOptions
from .factory import create_client

__version__ = "0.1.0"

__all__ = [
    'MixpanelAnalytics',
    'Endpoint',
    'Event',
    'PeopleOperation',
    'AnalyticsConfig',
    'ClientOptions',
    'create_client',
]
