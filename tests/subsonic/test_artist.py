"""Unit tests for Artist, ArtistInfo and SimilarArtist normalisation and accessors."""

import pytest

from conftest import FakeTransport, envelope
from subdata.album import Album
from subdata.artist import Artist, ArtistInfo, SimilarArtist, get_artist
from subdata.exceptions import MalformedFieldError, SubsonicError, SubsonicNotFoundError


def raw_artist():
    return {
        "id": "1",
        "name": "Misteur Valaire",
        "coverArt": "ar-1",
        "albumCount": 1,
        "album": [
            {
                "id": "1",
                "name": "Bellevue",
                "artist": "Misteur Valaire",
                "artistId": "1",
                "coverArt": "al-1",
                "songCount": 9,
                "duration": 1920,
                "playCount": 2223,
                "created": "2017-03-12T11:07:25.000Z",
                "genre": "(255)",
            }
        ],
    }


class TestArtistParsing:
    """Test Artist.from_json."""

    def test_parse_artist(self):
        parsed = Artist.from_json(raw_artist())

        assert parsed.id == 1
        assert parsed.name == "Misteur Valaire"
        assert parsed.cover == "ar-1"
        assert parsed.album_count == 1

    def test_parse_artist_deep(self):
        parsed = Artist.from_json(raw_artist())

        assert len(parsed.embedded_albums) == parsed.album_count
        album = parsed.embedded_albums[0]
        assert album.id == 1
        assert album.name == "Bellevue"
        assert album.song_count == 9
        assert album.artist_id == 1

    def test_minimal_payload(self):
        parsed = Artist.from_json(
            {"id": "1", "name": "Misteur Valaire", "coverArt": "ar-1", "albumCount": 1,
             "album": [{"id": "1", "name": "Bellevue", "songCount": 9}]}
        )

        assert parsed == Artist(
            id=1,
            name="Misteur Valaire",
            cover="ar-1",
            album_count=1,
            embedded_albums=(Album(id=1, name="Bellevue", song_count=9),),
        )

    def test_string_and_numeric_ids_agree(self):
        as_string = Artist.from_json({"id": "1", "name": "A", "albumCount": "0"})
        as_number = Artist.from_json({"id": 1, "name": "A", "albumCount": 0})

        assert as_string == as_number

    def test_non_numeric_id(self):
        with pytest.raises(MalformedFieldError) as exc_info:
            Artist.from_json({"id": "abc", "name": "A", "albumCount": 0})

        assert exc_info.value.field == "id"
        assert exc_info.value.raw == "abc"

    def test_malformed_nested_album_count(self):
        raw = raw_artist()
        raw["album"][0]["songCount"] = "nine"

        with pytest.raises(MalformedFieldError) as exc_info:
            Artist.from_json(raw)

        assert exc_info.value.field == "songCount"

    def test_missing_cover_art(self):
        parsed = Artist.from_json({"id": "1", "name": "A", "albumCount": 0})

        assert parsed.cover is None
        assert not parsed.has_cover_art()
        assert parsed.embedded_albums == ()

    def test_round_trip(self):
        parsed = Artist.from_json(raw_artist())

        assert Artist.from_json(parsed.to_json()) == parsed

    def test_to_json_uses_wire_names(self):
        doc = Artist.from_json(raw_artist()).to_json()

        assert doc["albumCount"] == 1
        assert doc["coverArt"] == "ar-1"
        assert doc["album"][0]["songCount"] == 9


class TestArtistAlbums:
    """Test the lazy album reconciliation."""

    def test_complete_albums_need_no_fetch(self):
        transport = FakeTransport()
        artist = Artist.from_json(raw_artist())

        albums = artist.albums(transport)

        assert [a.name for a in albums] == ["Bellevue"]
        assert transport.calls == []

    def test_partial_albums_fetch_artist_once(self, fixtures):
        transport = FakeTransport({"getArtist": fixtures["getArtist_success"]})
        artist = Artist.from_json({"id": "1", "name": "Misteur Valaire", "albumCount": 1})

        albums = artist.albums(transport)

        assert transport.calls == [("getArtist", {"id": "1"})]
        assert len(albums) == 1
        assert albums[0].id == 1
        assert albums[0].name == "Bellevue"
        assert albums[0].song_count == 9

    def test_refetch_replaces_partial_list(self):
        fresh = raw_artist()
        fresh["albumCount"] = 2
        fresh["album"].append({"id": "2", "name": "Golden Bombay", "songCount": 12})
        transport = FakeTransport({"getArtist": envelope(artist=fresh)})
        stale = Artist.from_json({**raw_artist(), "albumCount": 2})

        albums = stale.albums(transport)

        assert [a.id for a in albums] == [1, 2]

    def test_no_fetch_at_parse_time(self):
        transport = FakeTransport()
        Artist.from_json({"id": "1", "name": "Misteur Valaire", "albumCount": 4})

        assert transport.calls == []

    def test_each_call_is_an_independent_round_trip(self, fixtures):
        transport = FakeTransport({"getArtist": fixtures["getArtist_success"]})
        artist = Artist.from_json({"id": "1", "name": "Misteur Valaire", "albumCount": 1})

        artist.albums(transport)
        artist.albums(transport)

        assert transport.operations() == ["getArtist", "getArtist"]

    def test_refetch_error_propagates(self, fixtures):
        transport = FakeTransport({"getArtist": fixtures["getArtist_not_found"]})
        artist = Artist.from_json({"id": "1", "name": "Misteur Valaire", "albumCount": 1})

        with pytest.raises(SubsonicNotFoundError):
            artist.albums(transport)


class TestArtistAccessors:
    """Test info, top songs and cover art accessors."""

    def test_info(self, fixtures):
        transport = FakeTransport({"getArtistInfo": fixtures["getArtistInfo_success"]})
        artist = Artist.from_json(raw_artist())

        info = artist.info(transport, count=2, include_not_present=False)

        assert transport.calls == [("getArtistInfo", {"id": "1", "count": "2", "includeNotPresent": "false"})]
        assert info.lastfm_url == "https://www.last.fm/music/Misteur+Valaire"
        assert info.image_urls[2] == "https://lastfm.example.com/174s/1.png"
        assert [s.name for s in info.similar_artists] == ["Chinese Man", "Caravan Palace"]
        assert info.similar_artists[0].album_count == 3

    def test_info_optional_args_omitted(self):
        transport = FakeTransport({"getArtistInfo": envelope(artistInfo={})})

        info = Artist.from_json(raw_artist()).info(transport)

        assert transport.calls == [("getArtistInfo", {"id": "1"})]
        assert info == ArtistInfo()

    def test_top_songs(self, fixtures):
        transport = FakeTransport({"getTopSongs": fixtures["getTopSongs_success"]})

        songs = Artist.from_json(raw_artist()).top_songs(transport, count=2)

        assert transport.calls == [("getTopSongs", {"artist": "Misteur Valaire", "count": "2"})]
        assert [s.id for s in songs] == [27, 31]

    def test_top_songs_empty(self):
        transport = FakeTransport({"getTopSongs": envelope(topSongs={})})

        assert Artist.from_json(raw_artist()).top_songs(transport) == []

    def test_cover_art(self):
        transport = FakeTransport(binaries={"getCoverArt": b"\x89PNG"})

        cover = Artist.from_json(raw_artist()).cover_art(transport, 300)

        assert cover == b"\x89PNG"
        assert transport.calls == [("getCoverArt", {"id": "ar-1", "size": "300"})]

    def test_cover_art_url(self):
        transport = FakeTransport()

        url = Artist.from_json(raw_artist()).cover_art_url(transport)

        assert url == "https://music.example.com/rest/getCoverArt?id=ar-1"

    def test_cover_art_missing(self):
        transport = FakeTransport()
        artist = Artist.from_json({"id": "1", "name": "A", "albumCount": 0})

        with pytest.raises(SubsonicError, match="no cover art found"):
            artist.cover_art(transport)
        assert transport.calls == []


class TestArtistInfo:
    """Test ArtistInfo normalisation."""

    def test_round_trip(self, fixtures):
        raw = fixtures["getArtistInfo_success"]["subsonic-response"]["artistInfo"]
        info = ArtistInfo.from_json(raw)

        assert ArtistInfo.from_json(info.to_json()) == info

    def test_single_similar_artist_round_trip(self):
        info = ArtistInfo.from_json({
            "biography": "Electro-funk from Sherbrooke",
            "similarArtist": {"id": "2", "name": "Chinese Man", "albumCount": "3"},
        })

        assert info.similar_artists == (SimilarArtist(id=2, name="Chinese Man", album_count=3),)
        assert ArtistInfo.from_json(info.to_json()) == info


class TestSimilarArtist:
    """Test SimilarArtist upgrade."""

    def test_parse_string_counts(self):
        similar = SimilarArtist.from_json({"id": "2", "name": "Chinese Man", "albumCount": "3"})

        assert similar == SimilarArtist(id=2, name="Chinese Man", album_count=3)

    def test_malformed_album_count(self):
        with pytest.raises(MalformedFieldError) as exc_info:
            SimilarArtist.from_json({"id": "2", "name": "Chinese Man", "albumCount": "many"})

        assert exc_info.value.field == "albumCount"

    def test_into_artist(self, fixtures):
        transport = FakeTransport({"getArtist": fixtures["getArtist_success"]})
        similar = SimilarArtist(id=1, name="Misteur Valaire", album_count=1, cover="ar-1")

        artist = similar.into_artist(transport)

        assert transport.calls == [("getArtist", {"id": "1"})]
        assert artist == Artist.from_json(raw_artist())

    def test_into_artist_not_found(self, fixtures):
        transport = FakeTransport({"getArtist": fixtures["getArtist_not_found"]})
        similar = SimilarArtist(id=99, name="Gone", album_count=0)

        with pytest.raises(SubsonicNotFoundError) as exc_info:
            similar.into_artist(transport)

        assert exc_info.value.code == 70

    def test_cover_capability(self):
        similar = SimilarArtist(id=2, name="Chinese Man", album_count=3, cover="ar-2")

        assert similar.has_cover_art()
        assert similar.cover_id() == "ar-2"


def test_get_artist(fixtures):
    transport = FakeTransport({"getArtist": fixtures["getArtist_success"]})

    artist = get_artist(transport, 1)

    assert artist.name == "Misteur Valaire"
    assert artist.albums(transport)[0].name == "Bellevue"
    assert transport.operations() == ["getArtist"]
