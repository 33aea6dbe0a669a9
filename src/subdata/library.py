"""Library-wide operations: music folders, genres, the artist index and scanning."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .artist import Artist
from .coerce import WireEntity, flag, list_of, optional_text, optional_uint, text, uint, wire_schema
from .exceptions import MalformedFieldError
from .query import Query
from .response import Envelope, check
from .transport import Transport, fetch

logger = logging.getLogger(__name__)


@wire_schema("musicFolder", [
    uint("id", "id"),
    optional_text("name", "name"),
])
@dataclass(frozen=True)
class MusicFolder(WireEntity):
    """A top-level music folder configured on the server."""

    id: int
    name: Optional[str] = None


@wire_schema("genre", [
    text("name", "value"),
    optional_uint("song_count", "songCount"),
    optional_uint("album_count", "albumCount"),
])
@dataclass(frozen=True)
class Genre(WireEntity):
    """A genre with its song and album counts (counts absent before API 1.10.2)."""

    name: str
    song_count: Optional[int] = None
    album_count: Optional[int] = None


@wire_schema("scanStatus", [
    flag("scanning", "scanning"),
    optional_uint("count", "count"),
])
@dataclass(frozen=True)
class ScanStatus(WireEntity):
    """Library scan state.

    Attributes:
        scanning: Whether a scan is running
        count: Items scanned so far
    """

    scanning: bool = False
    count: Optional[int] = None


def ping(transport: Transport) -> bool:
    """Test connectivity and credentials.

    Returns:
        True if the server answered with an "ok" envelope

    Raises:
        SubsonicApiError: If the server rejected the request
    """
    check(Envelope.from_document(transport.invoke("ping", None)))
    logger.info("Subsonic ping successful")
    return True


def get_music_folders(transport: Transport) -> List[MusicFolder]:
    """Return all configured music folders."""
    folders = list_of(fetch(transport, "getMusicFolders"), "musicFolder", MusicFolder.from_json)
    logger.info(f"Retrieved {len(folders)} music folders")
    return folders


def get_genres(transport: Transport) -> List[Genre]:
    """Return all genres in the library."""
    genres = list_of(fetch(transport, "getGenres"), "genre", Genre.from_json)
    logger.info(f"Retrieved {len(genres)} genres")
    return genres


def get_artists(transport: Transport, music_folder_id: Optional[int] = None) -> List[Artist]:
    """Return every artist, flattened from the alphabetical index.

    The server groups artists as ``index[].artist[]``; the grouping is
    dropped. Artists returned here embed no albums, so ``Artist.albums()``
    will fetch each one on demand.

    Args:
        transport: Transport to fetch through
        music_folder_id: Optional music folder to restrict to
    """
    query = Query().arg("musicFolderId", music_folder_id).build()
    payload = fetch(transport, "getArtists", query)
    indexes = list_of(payload, "index", lambda group: group)

    artists = []
    for group in indexes:
        if not isinstance(group, dict):
            raise MalformedFieldError("index", group)
        artists.extend(list_of(group, "artist", Artist.from_json))

    logger.info(f"Retrieved {len(artists)} artists")
    return artists


def get_scan_status(transport: Transport) -> ScanStatus:
    """Return the library scan state."""
    return ScanStatus.from_json(fetch(transport, "getScanStatus"))


def start_scan(transport: Transport) -> ScanStatus:
    """Ask the server to rescan the library and return the resulting state."""
    logger.info("Requesting library scan")
    return ScanStatus.from_json(fetch(transport, "startScan"))
