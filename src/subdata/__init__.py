"""Typed data layer for Subsonic-compatible music servers."""

__version__ = "1.0.0"

from .album import Album, get_album
from .artist import Artist, ArtistInfo, SimilarArtist, get_artist
from .client import SubsonicClient
from .coerce import parse_lenient_uint
from .config import SubsonicConfig
from .exceptions import (
    ClientVersionTooOldError,
    MalformedFieldError,
    ServerVersionTooOldError,
    SubsonicApiError,
    SubsonicAuthenticationError,
    SubsonicAuthorizationError,
    SubsonicError,
    SubsonicNotFoundError,
    SubsonicParameterError,
    SubsonicTransportError,
    SubsonicTrialError,
    SubsonicVersionError,
    TokenAuthenticationNotSupportedError,
    UnrecognizedResponseError,
)
from .library import (
    Genre,
    MusicFolder,
    ScanStatus,
    get_artists,
    get_genres,
    get_music_folders,
    get_scan_status,
    ping,
    start_scan,
)
from .media import HasCoverArt
from .query import Query
from .response import Envelope, PayloadKind, ResponseStatus, resolve, resolve_document
from .song import Song, get_song
from .transport import Transport, fetch

__all__ = [
    # Transport
    "SubsonicClient",
    "SubsonicConfig",
    "Transport",
    "Query",
    "fetch",
    # Envelope
    "Envelope",
    "PayloadKind",
    "ResponseStatus",
    "resolve",
    "resolve_document",
    "parse_lenient_uint",
    # Entities
    "HasCoverArt",
    "Artist",
    "ArtistInfo",
    "SimilarArtist",
    "Album",
    "Song",
    "MusicFolder",
    "Genre",
    "ScanStatus",
    # Operations
    "get_artist",
    "get_artists",
    "get_album",
    "get_song",
    "get_music_folders",
    "get_genres",
    "get_scan_status",
    "start_scan",
    "ping",
    # Exceptions
    "SubsonicError",
    "SubsonicApiError",
    "SubsonicAuthenticationError",
    "TokenAuthenticationNotSupportedError",
    "ClientVersionTooOldError",
    "ServerVersionTooOldError",
    "SubsonicAuthorizationError",
    "SubsonicNotFoundError",
    "SubsonicParameterError",
    "SubsonicTrialError",
    "SubsonicVersionError",
    "SubsonicTransportError",
    "UnrecognizedResponseError",
    "MalformedFieldError",
]
