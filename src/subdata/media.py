"""Cover art capability shared by artists, albums and songs."""

import logging
from typing import Optional

from .exceptions import SubsonicError
from .query import Query
from .transport import Transport

logger = logging.getLogger(__name__)


class HasCoverArt:
    """Mixin for entities carrying a ``cover`` reference.

    The reference is an opaque id for ``getCoverArt`` (``ar-1``, ``al-7``...),
    not a URL.
    """

    cover: Optional[str]

    def has_cover_art(self) -> bool:
        return self.cover is not None

    def cover_id(self) -> Optional[str]:
        return self.cover

    def _cover_query(self, size: Optional[int]) -> dict:
        if self.cover is None:
            raise SubsonicError("no cover art found")
        return Query.with_("id", self.cover).arg("size", size).build()

    def cover_art(self, transport: Transport, size: Optional[int] = None) -> bytes:
        """Download the cover image.

        Args:
            transport: Transport to fetch through
            size: Optional edge length in pixels to scale to

        Returns:
            Raw image bytes

        Raises:
            SubsonicError: If the entity has no cover art
        """
        query = self._cover_query(size)
        logger.debug(f"Fetching cover art {self.cover} (size={size})")
        return transport.invoke_bytes("getCoverArt", query)

    def cover_art_url(self, transport: Transport, size: Optional[int] = None) -> str:
        """Return the cover image URL without downloading it."""
        return transport.build_url("getCoverArt", self._cover_query(size))
