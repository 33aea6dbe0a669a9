"""Transport capability consumed by entity accessors."""

import logging
from typing import Any, Dict, Optional, Protocol

from .response import resolve_document

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything able to perform a named Subsonic operation.

    ``SubsonicClient`` is the production implementation; tests use fakes.
    Query dicts hold only arguments that are set.
    """

    def invoke(self, operation: str, query: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Perform the operation and return the decoded JSON document."""

    def invoke_bytes(self, operation: str, query: Optional[Dict[str, str]] = None) -> bytes:
        """Perform the operation and return the binary body."""

    def build_url(self, operation: str, query: Optional[Dict[str, str]] = None) -> str:
        """Return a fully addressable URL for the operation."""


def fetch(transport: Transport, operation: str, query: Optional[Dict[str, str]] = None) -> Any:
    """One round trip: invoke the operation and resolve its envelope.

    Args:
        transport: Transport to send the request through
        operation: Subsonic operation name, e.g. "getArtist"
        query: Operation arguments

    Returns:
        The raw payload value of the response

    Raises:
        SubsonicApiError: If the server reported a failure
        UnrecognizedResponseError: If the response carried no known payload
        SubsonicTransportError: If the transport failed
    """
    logger.debug(f"Fetching {operation} {query or {}}")
    return resolve_document(transport.invoke(operation, query))
