"""
Analytics client: event queue, profile operations and payload assembly.
"""

from .client import MixpanelAnalytics
from .schemas import Endpoint, Event, PeopleOperation

__all__ = ['MixpanelAnalytics', 'Endpoint', 'Event', 'PeopleOperation']
