#!/usr/bin/env python3
"""
HTTP Transport

Thin requests wrapper used to deliver encoded payloads to the collection endpoint.
"""

from typing import Optional

import requests
import structlog

from ..config import DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT
from ..utils.error_utils import TransportError

logger = structlog.get_logger(__name__)


class HttpTransport:
    """GET-capable HTTP client sharing one requests session."""

    def __init__(
        self,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': user_agent})

    def get(self, url: str) -> requests.Response:
        """
        Perform a GET request.

        Returns:
            The response, for successful (2xx/3xx) status codes.

        Raises:
            TransportError: On timeouts, connection errors and 4xx/5xx responses.
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status() # Raise HTTPError for bad responses (4xx or 5xx)
            return response
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Timeout error: {e}") from e
        except requests.exceptions.RequestException as e:
            status_code = e.response.status_code if e.response is not None else None
            raise TransportError(f"Request failed ({status_code}): {e}", status_code=status_code) from e

    def close(self) -> None:
        self.session.close()
