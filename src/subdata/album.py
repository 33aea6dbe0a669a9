"""Album entity."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .coerce import WireEntity, entities, optional_text, optional_uint, text, uint, wire_schema
from .media import HasCoverArt
from .query import Query
from .reconcile import embedded_or_refetch
from .song import Song
from .transport import Transport, fetch


@wire_schema("album", [
    uint("id", "id"),
    text("name", "name"),
    optional_text("artist", "artist"),
    optional_uint("artist_id", "artistId"),
    optional_text("cover", "coverArt"),
    uint("song_count", "songCount"),
    optional_uint("duration", "duration"),
    optional_uint("play_count", "playCount"),
    optional_uint("year", "year"),
    optional_text("genre", "genre"),
    entities("embedded_songs", "song", Song.from_json),
])
@dataclass(frozen=True)
class Album(HasCoverArt, WireEntity):
    """An album (ID3 browsing).

    Attributes:
        id: Album id
        name: Album name
        artist: Album artist name
        artist_id: Album artist id
        cover: Cover art reference
        song_count: Number of songs the server reports for the album
        duration: Total duration in seconds
        play_count: Play count
        year: Release year
        genre: Genre
        embedded_songs: Songs as embedded in the response; may be partial,
            use ``songs()``
    """

    id: int
    name: str
    song_count: int
    artist: Optional[str] = None
    artist_id: Optional[int] = None
    cover: Optional[str] = None
    duration: Optional[int] = None
    play_count: Optional[int] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    embedded_songs: Tuple[Song, ...] = ()

    def songs(self, transport: Transport) -> List[Song]:
        """Return the album's songs.

        Album list responses omit songs, so when the embedded songs do not
        match ``song_count`` the album is fetched again with ``getAlbum``.
        """
        return embedded_or_refetch(
            self.embedded_songs,
            self.song_count,
            lambda: get_album(transport, self.id).embedded_songs,
            label=f"album {self.id}",
        )


def get_album(transport: Transport, album_id: int) -> Album:
    """Fetch an album with its songs (``getAlbum``)."""
    return Album.from_json(fetch(transport, "getAlbum", Query.with_("id", album_id).build()))
