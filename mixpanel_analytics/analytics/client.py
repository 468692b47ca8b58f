#!/usr/bin/env python3
"""
Mixpanel Analytics Client

Queues tracked events until the client is initialized, then sends one
fire-and-forget request per event. Profile ("people") operations are sent
immediately once a distinct id is known. Super properties are mirrored to a
key-value store so they survive restarts.

Nothing here raises into the host application because of storage, network
or payload problems: those are logged and dropped.
"""

import functools
import json
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, List, Mapping, Optional, Union

import structlog

from ..collaborators.device import DEFAULT_PLATFORM_TAG, DeviceInfo
from ..collaborators.storage import MemoryStorage, Storage
from ..collaborators.transport import HttpTransport
from ..config import ClientOptions
from ..utils.error_utils import PayloadError, TransportError, error_fields
from .payload import build_event_payload, build_people_payload, build_request_url, encode_data
from .schemas import Endpoint, Event, PeopleOperation, Props

logger = structlog.get_logger(__name__)


class MixpanelAnalytics:
    """Client for the Mixpanel track and engage endpoints."""

    def __init__(
        self,
        token: str,
        config: Union[ClientOptions, Mapping[str, Any], None] = None,
        *,
        storage: Optional[Storage] = None,
        device: Optional[DeviceInfo] = None,
        transport: Optional[HttpTransport] = None
    ):
        """
        Args:
            token: Mixpanel project token.
            config: ClientOptions, or a mapping of option names
                (client_id/clientId, storage_key/storageKey, api_url/apiUrl, ...).
            storage: Super properties store. Defaults to in-process memory.
            device: Device metadata provider. Defaults to the host machine.
            transport: HTTP client. Defaults to a requests-backed HttpTransport.
        """
        if not token or not isinstance(token, str):
            raise ValueError("A Mixpanel project token is required.")

        self.token = token
        self.options = ClientOptions.coerce(config)
        self.storage_key = self.options.storage_key
        self.api_url = self.options.api_url
        self.client_id = self.options.client_id

        self.ready = False
        self.user_id: Optional[str] = None
        self.platform: Optional[str] = None
        self.model: Optional[str] = None
        self.queue: List[Event] = []
        self.super_props: Props = {}

        self.storage = storage if storage is not None else MemoryStorage()
        self.device = device if device is not None else DeviceInfo.from_host()
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else HttpTransport(
            timeout=self.options.request_timeout,
            user_agent=self.options.user_agent
        )
        self.constants: Props = self.device.constants()

        self._lock = threading.RLock()
        self._closed = False
        self._executor = ThreadPoolExecutor(
            max_workers=self.options.max_workers,
            thread_name_prefix="mixpanel-push"
        )

    # --- Lifecycle ---

    def init(self, wait: bool = True) -> Optional[Future]:
        """
        Resolve device metadata, load persisted super properties, then mark
        the client ready and flush anything queued so far.

        Args:
            wait: Run in the calling thread (True) or on the client's worker
                pool (False), in which case the Future is returned.
        """
        if wait:
            self._initialize()
            return None
        return self._executor.submit(self._initialize)

    def _initialize(self) -> None:
        self._resolve_device()

        super_props = self._load_super_props()
        with self._lock:
            self.super_props = super_props
            self.ready = True
        logger.info("Mixpanel client ready", platform=self.platform, queued=len(self.queue))
        self._flush()

    def _resolve_device(self) -> None:
        user_agent = None
        width, height = 0, 0
        try:
            user_agent = self.device.get_user_agent()
            width, height = self.device.get_window_size()
        except Exception as e:
            logger.warning("Could not read device metadata, using defaults", **error_fields(e))

        self.constants.update({
            "screen_height": height,
            "screen_size": f"{width}x{height}",
            "screen_width": width,
            "user_agent": user_agent,
        })

        try:
            if self.device.is_ios():
                self.platform = self.device.model_id
                self.model = self.device.model_name
            else:
                self.platform = self.device.platform_tag
        except Exception as e:
            logger.warning("Could not resolve platform, using default tag", **error_fields(e))
            self.platform = getattr(self.device, 'platform_tag', DEFAULT_PLATFORM_TAG)
            self.model = None

    def _load_super_props(self) -> Props:
        try:
            stored = self.storage.get(self.storage_key)
            loaded = json.loads(stored if stored is not None else '{}')
        except Exception as e:
            logger.debug("Could not load super properties, starting empty", storage_key=self.storage_key, **error_fields(e))
            return {}
        if not isinstance(loaded, dict):
            logger.debug("Stored super properties are not an object, starting empty", storage_key=self.storage_key)
            return {}
        return loaded

    def close(self, wait: bool = True) -> None:
        """Stop accepting pushes and release worker threads.

        With wait=True, blocks until in-flight requests have settled.
        """
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=wait)
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> 'MixpanelAnalytics':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # --- Super properties & identity ---

    def register(self, props: Mapping[str, Any]) -> None:
        """Replace the super properties and persist them."""
        if not isinstance(props, Mapping):
            logger.warning("Super properties must be a mapping, ignored", props_type=type(props).__name__)
            return
        self.super_props = dict(props)
        try:
            self.storage.set(self.storage_key, json.dumps(self.super_props))
        except Exception as e:
            logger.debug("Could not persist super properties", storage_key=self.storage_key, **error_fields(e))

    def identify(self, user_id: Optional[str] = None) -> None:
        self.user_id = user_id

    def reset(self) -> None:
        """Fall back to the anonymous client id and clear super properties."""
        self.identify(self.client_id)
        self.super_props = {}
        try:
            self.storage.set(self.storage_key, json.dumps({}))
        except Exception as e:
            logger.debug("Could not clear persisted super properties", storage_key=self.storage_key, **error_fields(e))

    # --- Events ---

    def track(self, name: str, props: Optional[Mapping[str, Any]] = None) -> None:
        """Queue an event and flush if the client is ready."""
        if props is not None and not isinstance(props, Mapping):
            logger.warning("Event properties must be a mapping, event dropped", event=name, props_type=type(props).__name__)
            return
        with self._lock:
            self.queue.append(Event(name=name, props=dict(props) if props is not None else None))
        self._flush()

    def _flush(self) -> None:
        with self._lock:
            if not self.ready:
                return
            while self.queue:
                event = self.queue.pop()
                self._push_event(event)

    def _identity(self) -> Props:
        return {
            "distinct_id": self.user_id,
            "token": self.token,
            "client_id": self.client_id,
            "platform": self.platform,
            "model": self.model,
        }

    def _push_event(self, event: Event) -> Optional[Future]:
        data = build_event_payload(event, self.constants, self.super_props, self._identity())
        future = self._push(Endpoint.EVENTS, data)
        if future is not None:
            future.add_done_callback(functools.partial(_mark_sent, event))
        return future

    # --- People (profile) operations ---

    def people_set(self, props: Any) -> None:
        self._push_people(PeopleOperation.SET, props)

    def people_set_once(self, props: Any) -> None:
        self._push_people(PeopleOperation.SET_ONCE, props)

    def people_unset(self, props: Any) -> None:
        self._push_people(PeopleOperation.UNSET, props)

    def people_increment(self, props: Any) -> None:
        self._push_people(PeopleOperation.ADD, props)

    def people_append(self, props: Any) -> None:
        self._push_people(PeopleOperation.APPEND, props)

    def people_union(self, props: Any) -> None:
        self._push_people(PeopleOperation.UNION, props)

    def people_delete_user(self) -> None:
        self._push_people(PeopleOperation.DELETE, '')

    def _push_people(self, operation: PeopleOperation, props: Any) -> Optional[Future]:
        if not self.user_id:
            logger.debug("Profile operation dropped: no distinct id", operation=operation.value)
            return None
        data = build_people_payload(self.token, self.user_id, operation, props)
        return self._push(Endpoint.PEOPLE, data)

    # --- Transmission ---

    def _push(self, endpoint: Endpoint, data: Dict[str, Any]) -> Optional[Future]:
        try:
            encoded = encode_data(data)
        except PayloadError as e:
            logger.warning("Dropping unencodable payload", endpoint=endpoint.value, **error_fields(e))
            return None

        url = build_request_url(self.api_url, endpoint, encoded)
        if self._closed:
            logger.warning("Client closed, request dropped", endpoint=endpoint.value)
            return None
        try:
            return self._executor.submit(self._deliver, endpoint, url)
        except RuntimeError as e:
            # Executor shut down between the check above and submit
            logger.warning("Client closed, request dropped", endpoint=endpoint.value, error=str(e))
            return None

    def _deliver(self, endpoint: Endpoint, url: str) -> int:
        try:
            response = self.transport.get(url)
        except TransportError as e:
            logger.warning("Mixpanel request failed", endpoint=endpoint.value, **error_fields(e))
            raise
        except Exception as e:
            logger.error("Unexpected error sending Mixpanel request", endpoint=endpoint.value, error=str(e), exc_info=True)
            raise
        logger.debug("Mixpanel request sent", endpoint=endpoint.value, status_code=response.status_code)
        return response.status_code


def _mark_sent(event: Event, future: Future) -> None:
    if not future.cancelled() and future.exception() is None:
        event.sent = True
