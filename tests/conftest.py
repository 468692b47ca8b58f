import logging
from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlsplit

import fakeredis
import pytest

from mixpanel_analytics.analytics.client import MixpanelAnalytics
from mixpanel_analytics.analytics.payload import decode_data
from mixpanel_analytics.collaborators.device import DeviceInfo
from mixpanel_analytics.collaborators.storage import MemoryStorage, RedisStorage
from mixpanel_analytics.utils.error_utils import StorageError

# Configure basic logging for fixture setup/teardown visibility
logging.basicConfig(level=logging.INFO)
log = logging.getLogger(__name__)


# --- Logging Fixture --- #

@pytest.fixture(scope="function", autouse=True)
def setup_test_logging(request):
    """Sets up logging level for each test function."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)
    log.debug(f"--- Starting test: {request.node.name} ---")

    yield

    root_logger.setLevel(original_level)


# --- Collaborator Fixtures --- #

@pytest.fixture
def device():
    """Android-like device with fixed metadata."""
    return DeviceInfo(
        app_build_number="42",
        app_id="demo-app",
        app_name="Demo App",
        app_version_string="1.2.3",
        device_name="Pixel 7",
        os_name="android",
        os_version="14",
        screen_width=412,
        screen_height=915,
        user_agent="Mozilla/5.0 (Linux; Android 14)",
        platform_tag="android",
    )


@pytest.fixture
def ios_device():
    return DeviceInfo(
        app_name="Demo App",
        device_name="iPhone",
        os_name="ios",
        os_version="17.4",
        screen_width=390,
        screen_height=844,
        user_agent="Mozilla/5.0 (iPhone)",
        model_id="iPhone15,2",
        model_name="iPhone 14 Pro",
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def failing_storage():
    """Storage whose reads and writes always fail."""
    broken = MagicMock()
    broken.get.side_effect = StorageError("storage offline")
    broken.set.side_effect = StorageError("storage offline")
    return broken


@pytest.fixture
def redis_client():
    """Fresh in-process fake Redis per test."""
    client = fakeredis.FakeStrictRedis(decode_responses=True)
    yield client
    client.flushall()


@pytest.fixture
def redis_storage(redis_client):
    return RedisStorage(redis_client)


@pytest.fixture
def transport():
    """Transport double recording every requested URL."""
    mock_transport = MagicMock()
    mock_transport.get.return_value = MagicMock(status_code=200, text="1")
    return mock_transport


@pytest.fixture
def make_client(device, storage, transport):
    """Factory for clients sharing the default collaborators; closes them after the test."""
    clients = []

    def _make(token="T", config=None, **overrides):
        kwargs = {"storage": storage, "device": device, "transport": transport}
        kwargs.update(overrides)
        client = MixpanelAnalytics(token, config, **kwargs)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def sent_payloads(transport):
    """Returns a callable decoding the payloads sent through the transport so far."""
    def _payloads():
        decoded = []
        for call_args, _ in transport.get.call_args_list:
            decoded.append(decode_request_url(call_args[0]))
        return decoded
    return _payloads


def decode_request_url(url):
    """Split a request URL into (endpoint, payload)."""
    parts = urlsplit(url)
    endpoint = parts.path.strip('/').split('/')[-1]
    encoded = parse_qs(parts.query)['data'][0]
    return endpoint, decode_data(encoded)
