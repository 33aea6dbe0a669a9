"""Subsonic response envelope and payload resolution.

Every JSON response from a Subsonic server is wrapped the same way:

    {"subsonic-response": {
        "status": "ok",
        "version": "1.16.1",
        "artist": {...}
    }}

At most one payload key is populated. ``resolve()`` turns the envelope into
either the single payload value or an exception.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .coerce import parse_lenient_uint
from .exceptions import MalformedFieldError, SubsonicApiError, UnrecognizedResponseError, api_error

logger = logging.getLogger(__name__)

ENVELOPE_KEY = "subsonic-response"


class ResponseStatus(str, Enum):
    """Envelope status."""

    OK = "ok"
    FAILED = "failed"


class PayloadKind(str, Enum):
    """Payload fields an envelope may carry, keyed by their wire name.

    Declaration order is the resolution priority: when a server populates
    more than one field, the first one listed here wins. Members follow the
    server's operation list. A new server operation means a new member here
    and nothing else.
    """

    # System
    LICENSE = "license"
    # Browsing
    MUSIC_FOLDERS = "musicFolders"
    INDEXES = "indexes"
    DIRECTORY = "directory"
    GENRES = "genres"
    ARTISTS = "artists"
    ARTIST = "artist"
    ALBUMS = "albums"
    ALBUM = "album"
    SONG = "song"
    VIDEOS = "videos"
    VIDEO_INFO = "videoInfo"
    ARTIST_INFO = "artistInfo"
    ARTIST_INFO2 = "artistInfo2"
    ALBUM_INFO = "albumInfo"
    SIMILAR_SONGS = "similarSongs"
    SIMILAR_SONGS2 = "similarSongs2"
    TOP_SONGS = "topSongs"
    # Album/song lists
    ALBUM_LIST = "albumList"
    ALBUM_LIST2 = "albumList2"
    RANDOM_SONGS = "randomSongs"
    SONGS_BY_GENRE = "songsByGenre"
    NOW_PLAYING = "nowPlaying"
    STARRED = "starred"
    STARRED2 = "starred2"
    # Searching
    SEARCH_RESULT = "searchResult"
    SEARCH_RESULT2 = "searchResult2"
    SEARCH_RESULT3 = "searchResult3"
    # Playlists
    PLAYLISTS = "playlists"
    PLAYLIST = "playlist"
    # Media retrieval
    LYRICS = "lyrics"
    # Sharing
    SHARES = "shares"
    # Podcast
    PODCASTS = "podcasts"
    NEWEST_PODCASTS = "newestPodcasts"
    # Jukebox
    JUKEBOX_STATUS = "jukeboxStatus"
    JUKEBOX_PLAYLIST = "jukeboxPlaylist"
    # Internet radio
    INTERNET_RADIO_STATIONS = "internetRadioStations"
    # Chat
    CHAT_MESSAGES = "chatMessages"
    # User management
    USER = "user"
    USERS = "users"
    # Bookmarks
    BOOKMARKS = "bookmarks"
    PLAY_QUEUE = "playQueue"
    # Media library scanning
    SCAN_STATUS = "scanStatus"


@dataclass(frozen=True)
class ApiErrorBody:
    """The ``error`` object of a failed envelope."""

    code: int
    message: str

    @classmethod
    def from_json(cls, raw: Any) -> "ApiErrorBody":
        if not isinstance(raw, dict):
            raise MalformedFieldError("error", raw)
        return cls(
            code=parse_lenient_uint("code", raw.get("code", 0)),
            message=str(raw.get("message") or "Unknown error"),
        )

    def into_exception(self) -> SubsonicApiError:
        return api_error(self.code, self.message)


@dataclass(frozen=True)
class Envelope:
    """A parsed ``subsonic-response`` wrapper.

    Attributes:
        status: OK or FAILED
        version: Server API version string
        error: Error body, present when status is FAILED
        payloads: Populated payload fields, keyed by kind
    """

    status: ResponseStatus
    version: str
    error: Optional[ApiErrorBody] = None
    payloads: Dict[PayloadKind, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, doc: Any) -> "Envelope":
        """Parse a full response document.

        Args:
            doc: Decoded JSON, ``{"subsonic-response": {...}}``

        Returns:
            Envelope

        Raises:
            MalformedFieldError: If the wrapper or its status is missing or invalid
        """
        if not isinstance(doc, dict) or not isinstance(doc.get(ENVELOPE_KEY), dict):
            raise MalformedFieldError(ENVELOPE_KEY, doc)
        return cls.from_json(doc[ENVELOPE_KEY])

    @classmethod
    def from_json(cls, inner: Dict[str, Any]) -> "Envelope":
        """Parse the inner object of a response document."""
        raw_status = inner.get("status")
        try:
            status = ResponseStatus(raw_status)
        except ValueError:
            raise MalformedFieldError("status", raw_status) from None

        error = None
        if status is ResponseStatus.FAILED:
            raw_error = inner.get("error")
            error = ApiErrorBody.from_json(raw_error) if raw_error is not None else ApiErrorBody(0, "Unknown error")

        # Keys that are not payloads (type, serverVersion, openSubsonic) are dropped
        payloads = {kind: inner[kind.value] for kind in PayloadKind if inner.get(kind.value) is not None}

        return cls(
            status=status,
            version=str(inner.get("version", "")),
            error=error,
            payloads=payloads,
        )

    def is_ok(self) -> bool:
        return self.status is ResponseStatus.OK

    def is_failed(self) -> bool:
        return self.status is ResponseStatus.FAILED

    def into_error(self) -> Optional[SubsonicApiError]:
        """Return the envelope's error as an exception, or None if it succeeded."""
        if self.error is None:
            return None
        return self.error.into_exception()

    def payload_kind(self) -> Optional[PayloadKind]:
        """Return the highest priority populated payload kind, if any."""
        for kind in PayloadKind:
            if kind in self.payloads:
                return kind
        return None


def check(envelope: Envelope) -> None:
    """Raise the envelope's error if it failed.

    For operations such as ``ping`` or ``star`` whose success carries no payload.
    """
    if envelope.is_failed():
        err = envelope.into_error()
        logger.error(f"Subsonic API error {err.code}: {err.message}")
        raise err


def resolve(envelope: Envelope) -> Any:
    """Select the single payload value from an envelope.

    Args:
        envelope: Parsed envelope

    Returns:
        The raw JSON value of the highest priority populated payload field

    Raises:
        SubsonicApiError: If the envelope failed (payload fields are not inspected)
        UnrecognizedResponseError: If the envelope succeeded but has no known payload
    """
    check(envelope)

    kind = envelope.payload_kind()
    if kind is None:
        raise UnrecognizedResponseError(envelope.version)

    if len(envelope.payloads) > 1:
        logger.debug(f"Envelope carries {len(envelope.payloads)} payloads, using {kind.value}")
    return envelope.payloads[kind]


def resolve_document(doc: Any) -> Any:
    """Parse a full response document and resolve its payload."""
    return resolve(Envelope.from_document(doc))
