"""Song entity."""

import logging
from dataclasses import dataclass
from typing import Optional

from .coerce import WireEntity, flag, optional_text, optional_uint, text, uint, wire_schema
from .media import HasCoverArt
from .query import Query
from .transport import Transport, fetch

logger = logging.getLogger(__name__)


@wire_schema("song", [
    uint("id", "id"),
    text("title", "title"),
    optional_text("album", "album"),
    optional_text("artist", "artist"),
    optional_uint("album_id", "albumId"),
    optional_uint("artist_id", "artistId"),
    optional_text("cover", "coverArt"),
    optional_uint("track", "track"),
    optional_uint("disc_number", "discNumber"),
    optional_uint("year", "year"),
    optional_uint("duration", "duration"),
    optional_uint("size", "size"),
    optional_text("suffix", "suffix"),
    optional_text("content_type", "contentType"),
    optional_text("genre", "genre"),
    flag("is_video", "isVideo"),
])
@dataclass(frozen=True)
class Song(HasCoverArt, WireEntity):
    """A song (ID3 ``child`` element).

    Attributes:
        id: Song id
        title: Song title
        album: Album name
        artist: Artist name
        album_id: Id of the album the song belongs to
        artist_id: Id of the album artist
        cover: Cover art reference
        track: Track number
        disc_number: Disc number
        year: Release year
        duration: Duration in seconds
        size: File size in bytes
        suffix: File extension
        content_type: MIME type
        genre: Genre
        is_video: Whether the entry is a video
    """

    id: int
    title: str
    album: Optional[str] = None
    artist: Optional[str] = None
    album_id: Optional[int] = None
    artist_id: Optional[int] = None
    cover: Optional[str] = None
    track: Optional[int] = None
    disc_number: Optional[int] = None
    year: Optional[int] = None
    duration: Optional[int] = None
    size: Optional[int] = None
    suffix: Optional[str] = None
    content_type: Optional[str] = None
    genre: Optional[str] = None
    is_video: bool = False

    def stream_url(self, transport: Transport, max_bit_rate: Optional[int] = None) -> str:
        """Return a streaming URL for the song, suitable for a player or M3U entry.

        Args:
            transport: Transport used to build the URL
            max_bit_rate: Optional transcoding limit in kbps (0 means no limit)
        """
        query = Query.with_("id", self.id).arg("maxBitRate", max_bit_rate).build()
        return transport.build_url("stream", query)

    def download(self, transport: Transport) -> bytes:
        """Download the original, untranscoded file."""
        logger.debug(f"Downloading song {self.id}")
        return transport.invoke_bytes("download", Query.with_("id", self.id).build())


def get_song(transport: Transport, song_id: int) -> Song:
    """Fetch a song by id (``getSong``)."""
    return Song.from_json(fetch(transport, "getSong", Query.with_("id", song_id).build()))
