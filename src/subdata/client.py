"""HTTP transport for Subsonic API v1.16.1."""

import hashlib
import logging
import secrets
from typing import Any, Dict, Optional

import httpx

from .config import SubsonicConfig
from .exceptions import SubsonicTransportError, UnrecognizedResponseError
from .response import Envelope, check
from .transport import fetch

logger = logging.getLogger(__name__)

ERROR_CONTENT_TYPES = ("application/json", "text/xml", "application/xml")


class SubsonicClient:
    """Synchronous httpx transport for the Subsonic REST API.

    Implements the ``Transport`` protocol: ``invoke`` returns the decoded
    JSON document, ``invoke_bytes`` the binary body, ``build_url`` an
    addressable URL. Envelope resolution is left to ``subdata.response``.

    Attributes:
        config: SubsonicConfig with server connection details
        client: httpx.Client for HTTP requests

    Example:
        >>> config = SubsonicConfig(
        ...     url="https://music.example.com",
        ...     username="john",
        ...     password="secret"
        ... )
        >>> with SubsonicClient(config) as client:
        ...     artist = get_artist(client, 1)
        ...     albums = artist.albums(client)
    """

    def __init__(self, config: SubsonicConfig):
        """Initialize the transport.

        Args:
            config: SubsonicConfig with server URL and credentials
        """
        self.config = config
        self._base_url = config.url.rstrip("/")

        transport = httpx.HTTPTransport(
            limits=httpx.Limits(
                max_connections=100,
                max_keepalive_connections=20,
                keepalive_expiry=5.0,
            ),
            retries=0,
        )
        self.client = httpx.Client(
            base_url=self._base_url,
            timeout=httpx.Timeout(
                connect=30.0,
                read=60.0,  # cover art and downloads can be slow
                write=30.0,
                pool=5.0,
            ),
            transport=transport,
            follow_redirects=True,
        )

        logger.info(f"Initialized Subsonic client for {self._base_url}")

    def _endpoint(self, operation: str) -> str:
        return f"{self._base_url}/rest/{operation}"

    def _auth_params(self) -> Dict[str, str]:
        """Credential parameters: ``u``/``k`` for OpenSubsonic API keys, else ``u``/``t``/``s``."""
        if self.config.api_key:
            return {"u": self.config.username, "k": self.config.api_key}

        salt = secrets.token_hex(8)
        token = hashlib.md5(f"{self.config.password}{salt}".encode("utf-8")).hexdigest()
        return {"u": self.config.username, "t": token, "s": salt}

    def _build_params(self, query: Optional[Dict[str, str]]) -> Dict[str, str]:
        """Merge protocol, credential and operation parameters."""
        params = {
            "v": self.config.api_version,
            "c": self.config.client_name,
            "f": "json",
        }
        params.update(self._auth_params())
        params.update(query or {})
        return params

    def _get(self, operation: str, query: Optional[Dict[str, str]]) -> httpx.Response:
        try:
            response = self.client.get(self._endpoint(operation), params=self._build_params(query))
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Subsonic request {operation} failed: {e}")
            raise SubsonicTransportError(f"{operation}: {e}") from e
        return response

    def invoke(self, operation: str, query: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Perform an operation and return the decoded JSON document.

        Raises:
            SubsonicTransportError: For network/HTTP errors or a non-JSON body
        """
        logger.debug(f"Invoking {operation}")
        response = self._get(operation, query)
        try:
            return response.json()
        except ValueError as e:
            raise SubsonicTransportError(f"{operation}: response is not JSON") from e

    def invoke_bytes(self, operation: str, query: Optional[Dict[str, str]] = None) -> bytes:
        """Perform an operation that returns binary content (cover art, downloads).

        The server signals failures on binary endpoints with a JSON envelope
        instead of the expected content; that envelope is resolved and its
        error raised.

        Raises:
            SubsonicApiError: If the server returned an error envelope
            SubsonicTransportError: For network/HTTP errors
        """
        response = self._get(operation, query)

        content_type = response.headers.get("content-type", "")
        if content_type.startswith(ERROR_CONTENT_TYPES):
            logger.warning(f"Expected binary response from {operation} but got {content_type}")
            try:
                envelope = Envelope.from_document(response.json())
            except ValueError as e:
                raise SubsonicTransportError(f"{operation}: unexpected {content_type} body") from e
            check(envelope)
            raise UnrecognizedResponseError(envelope.version)

        logger.debug(f"Received {len(response.content)} bytes from {operation}")
        return response.content

    def build_url(self, operation: str, query: Optional[Dict[str, str]] = None) -> str:
        """Return an authenticated URL for the operation, e.g. for M3U entries."""
        return str(httpx.URL(self._endpoint(operation), params=self._build_params(query)))

    def get(self, operation: str, query: Optional[Dict[str, str]] = None) -> Any:
        """Invoke an operation and resolve its payload."""
        return fetch(self, operation, query)

    def close(self):
        """Close HTTP client and release resources."""
        self.client.close()
        logger.info("Closed Subsonic client")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
