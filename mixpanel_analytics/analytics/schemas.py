#!/usr/bin/env python3
"""
Analytics Data Schemas
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

Props = Dict[str, Any]


class Endpoint(str, Enum):
    """Collection paths on the Mixpanel API."""
    PEOPLE = "engage"
    EVENTS = "track"


class PeopleOperation(str, Enum):
    """Profile operations and the name they carry on the wire."""
    SET = "set"
    SET_ONCE = "set_once"
    UNSET = "unset"
    ADD = "add"
    APPEND = "append"
    UNION = "union"
    DELETE = "delete"

    @property
    def wire_key(self) -> str:
        return f"${self.value}"


@dataclass
class Event:
    """A tracked event waiting in (or popped from) the pending queue.

    ``sent`` flips to True once the request carrying the event gets a 2xx or
    3xx response. Transport errors, 4xx/5xx responses and dropped pushes
    leave it False. Nothing in the client reads it back.
    """

    name: str
    props: Optional[Props] = None
    sent: bool = False
