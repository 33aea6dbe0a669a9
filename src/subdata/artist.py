"""Artist entities: Artist, ArtistInfo and SimilarArtist."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .album import Album
from .coerce import WireEntity, entities, list_of, optional_text, text, uint, wire_schema
from .media import HasCoverArt
from .query import Query
from .reconcile import embedded_or_refetch
from .song import Song
from .transport import Transport, fetch

logger = logging.getLogger(__name__)


@wire_schema("artist", [
    uint("id", "id"),
    text("name", "name"),
    optional_text("cover", "coverArt"),
    uint("album_count", "albumCount"),
    entities("embedded_albums", "album", Album.from_json),
])
@dataclass(frozen=True)
class Artist(HasCoverArt, WireEntity):
    """An artist (ID3 browsing).

    Attributes:
        id: Artist id
        name: Artist name
        cover: Cover art reference
        album_count: Number of albums the server reports for the artist
        embedded_albums: Albums as embedded in the response; empty when the
            artist came from ``getArtists``. Use ``albums()``.
    """

    id: int
    name: str
    album_count: int
    cover: Optional[str] = None
    embedded_albums: Tuple[Album, ...] = ()

    def albums(self, transport: Transport) -> List[Album]:
        """Return the albums released by the artist.

        The embedded albums are returned as-is when their number matches
        ``album_count``; otherwise the artist is fetched again with
        ``getArtist`` and that response's albums are returned.
        """
        return embedded_or_refetch(
            self.embedded_albums,
            self.album_count,
            lambda: get_artist(transport, self.id).embedded_albums,
            label=f"artist {self.id}",
        )

    def info(
        self,
        transport: Transport,
        count: Optional[int] = None,
        include_not_present: Optional[bool] = None,
    ) -> "ArtistInfo":
        """Query last.fm (through the server) for more about the artist.

        Args:
            transport: Transport to fetch through
            count: Maximum number of similar artists to return
            include_not_present: Whether to include similar artists absent
                from the server

        Returns:
            ArtistInfo
        """
        query = (
            Query.with_("id", self.id)
            .arg("count", count)
            .arg("includeNotPresent", include_not_present)
            .build()
        )
        return ArtistInfo.from_json(fetch(transport, "getArtistInfo", query))

    def top_songs(self, transport: Transport, count: Optional[int] = None) -> List[Song]:
        """Return the artist's most played songs according to last.fm."""
        query = Query.with_("artist", self.name).arg("count", count).build()
        return list_of(fetch(transport, "getTopSongs", query), "song", Song.from_json)


@wire_schema("similarArtist", [
    uint("id", "id"),
    text("name", "name"),
    optional_text("cover", "coverArt"),
    uint("album_count", "albumCount"),
])
@dataclass(frozen=True)
class SimilarArtist(HasCoverArt, WireEntity):
    """An artist suggested by last.fm that exists on the server.

    Attributes:
        id: Artist id on the server
        name: Artist name
        cover: Cover art reference
        album_count: Number of albums on the server by the artist
    """

    id: int
    name: str
    album_count: int
    cover: Optional[str] = None

    def into_artist(self, transport: Transport) -> Artist:
        """Fetch the full artist from the server.

        Raises:
            SubsonicNotFoundError: If the server no longer knows the artist
        """
        return get_artist(transport, self.id)


@wire_schema("artistInfo", [
    optional_text("biography", "biography"),
    optional_text("musicbrainz_id", "musicBrainzId"),
    optional_text("lastfm_url", "lastFmUrl"),
    optional_text("small_image_url", "smallImageUrl"),
    optional_text("medium_image_url", "mediumImageUrl"),
    optional_text("large_image_url", "largeImageUrl"),
    entities("similar_artists", "similarArtist", SimilarArtist.from_json),
])
@dataclass(frozen=True)
class ArtistInfo(WireEntity):
    """Detailed information about an artist, sourced from last.fm.

    Attributes:
        biography: A blurb about the artist
        musicbrainz_id: The artist's MusicBrainz id
        lastfm_url: The artist's last.fm page
        small_image_url: Small artist image
        medium_image_url: Medium artist image
        large_image_url: Large artist image
        similar_artists: Similar artists present on the server
    """

    biography: Optional[str] = None
    musicbrainz_id: Optional[str] = None
    lastfm_url: Optional[str] = None
    small_image_url: Optional[str] = None
    medium_image_url: Optional[str] = None
    large_image_url: Optional[str] = None
    similar_artists: Tuple[SimilarArtist, ...] = ()

    @property
    def image_urls(self) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        """Small, medium and large image URLs."""
        return (self.small_image_url, self.medium_image_url, self.large_image_url)


def get_artist(transport: Transport, artist_id: int) -> Artist:
    """Fetch an artist with its albums (``getArtist``).

    Raises:
        SubsonicNotFoundError: If no artist has this id
    """
    logger.debug(f"Fetching artist {artist_id}")
    return Artist.from_json(fetch(transport, "getArtist", Query.with_("id", artist_id).build()))
