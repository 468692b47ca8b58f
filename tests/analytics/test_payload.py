import base64
import json

import pytest

from mixpanel_analytics.analytics.payload import (
    build_event_payload,
    build_people_payload,
    build_request_url,
    decode_data,
    encode_data,
)
from mixpanel_analytics.analytics.schemas import Endpoint, Event, PeopleOperation
from mixpanel_analytics.utils.error_utils import PayloadError


def test_build_event_payload_precedence():
    """Identity beats super properties, which beat event props, which beat constants."""
    event = Event(name="Purchase", props={"plan": "free", "os_version": "x", "token": "fake"})
    payload = build_event_payload(
        event,
        constants={"os_version": "14", "app_name": "Demo"},
        super_props={"plan": "pro"},
        identity={"token": "T", "distinct_id": "U1"},
    )

    assert payload["event"] == "Purchase"
    assert payload["properties"] == {
        "os_version": "x",
        "app_name": "Demo",
        "plan": "pro",
        "token": "T",
        "distinct_id": "U1",
    }


def test_build_event_payload_without_props():
    payload = build_event_payload(Event(name="Opened App"), {}, {}, {"token": "T"})

    assert payload == {"event": "Opened App", "properties": {"token": "T"}}


def test_build_event_payload_skips_unset_constants_and_identity():
    event = Event(name="Opened App", props={"referrer": None})
    payload = build_event_payload(
        event,
        constants={"expo_app_ownership": None, "app_name": "Demo"},
        super_props={},
        identity={"token": "T", "distinct_id": None, "model": None},
    )

    assert payload["properties"] == {"app_name": "Demo", "referrer": None, "token": "T"}


def test_build_people_payload():
    payload = build_people_payload("T", "U1", PeopleOperation.SET_ONCE, {"first_seen": "today"})

    assert payload == {"$token": "T", "$distinct_id": "U1", "$set_once": {"first_seen": "today"}}


def test_encode_data_is_base64_json():
    data = {"event": "Opened App", "properties": {"token": "T"}}
    encoded = encode_data(data)

    assert json.loads(base64.b64decode(encoded)) == data
    assert decode_data(encoded) == data


def test_encode_data_handles_unicode():
    data = {"event": "Café ☕"}

    assert decode_data(encode_data(data)) == data


def test_encode_data_rejects_unserializable():
    with pytest.raises(PayloadError) as excinfo:
        encode_data({"when": object()})

    assert "Payload serialization error" in str(excinfo.value)


def test_build_request_url_escapes_base64():
    url = build_request_url("https://api.mixpanel.com/", Endpoint.EVENTS, "ab+c/d==")

    assert url == "https://api.mixpanel.com/track/?data=ab%2Bc%2Fd%3D%3D"


def test_build_request_url_people_endpoint():
    url = build_request_url("https://api.mixpanel.com", Endpoint.PEOPLE, "abc")

    assert url == "https://api.mixpanel.com/engage/?data=abc"
