"""Payload assembly and encoding for Mixpanel requests."""

import base64
import json
from urllib.parse import quote
from typing import Any, Dict, Mapping

from .schemas import Endpoint, Event, PeopleOperation, Props
from ..utils.error_utils import PayloadError


def _present(values: Mapping[str, Any]) -> Props:
    return {k: v for k, v in values.items() if v is not None}


def build_event_payload(
    event: Event,
    constants: Mapping[str, Any],
    super_props: Mapping[str, Any],
    identity: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Merge device constants, event props and super properties into a track payload.

    Later sources win: constants < event props < super properties < identity.
    Identity holds distinct_id, token, client_id, platform and model. Unset
    (None) constants and identity fields are left out of the payload; None
    values supplied by the caller in props are sent as null.
    """
    properties: Props = _present(constants)
    if event.props:
        properties.update(event.props)
    properties.update(super_props)
    properties.update(_present(identity))
    return {
        "event": event.name,
        "properties": properties
    }


def build_people_payload(token: str, distinct_id: str, operation: PeopleOperation, props: Any) -> Dict[str, Any]:
    """Build an engage payload for a single profile operation."""
    return {
        "$token": token,
        "$distinct_id": distinct_id,
        operation.wire_key: props
    }


def encode_data(data: Any) -> str:
    """
    Serialize data to JSON and base64-encode it for the ``data`` query parameter.

    Raises:
        PayloadError: If the data is not JSON serializable.
    """
    try:
        payload_json = json.dumps(data, separators=(',', ':'))
    except (TypeError, ValueError) as e:
        raise PayloadError(f"Payload serialization error: {e}") from e
    return base64.b64encode(payload_json.encode('utf-8')).decode('ascii')


def decode_data(encoded: str) -> Any:
    """Inverse of encode_data."""
    return json.loads(base64.b64decode(encoded).decode('utf-8'))


def build_request_url(api_url: str, endpoint: Endpoint, encoded: str) -> str:
    """
    Build ``<api_url>/<endpoint>/?data=<encoded>``.

    ``+``, ``/`` and ``=`` from the base64 alphabet are percent-encoded so the
    query string survives form decoding on the server.
    """
    return f"{api_url.rstrip('/')}/{endpoint.value}/?data={quote(encoded, safe='')}"
