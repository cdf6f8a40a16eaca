from bson import ObjectId
import pytest

OWNER = {"user-id": "artist-1"}
STRANGER = {"user-id": "artist-2"}


@pytest.fixture
def two_tracks(seed_track):
    a = seed_track(title="First", artist="Band", duration=200)
    b = seed_track(title="Second", artist="Band", duration=150)
    return a, b


@pytest.fixture
def album(client, two_tracks):
    payload = {
        "title": "Debut",
        "genre": "Rock",
        "artistAvatar": "http://avatar",
        "trackIds": list(two_tracks),
    }
    resp = client.post("/albums", json=payload, headers=OWNER)
    assert resp.status_code == 201
    return resp.json()


def test_create_album_uses_caller_identity(client, collections, two_tracks):
    payload = {
        "title": "Debut",
        "genre": "Rock",
        "artistAvatar": "http://avatar",
        "trackIds": list(two_tracks),
        "artist": "someone-else",
    }

    resp = client.post("/albums", json=payload, headers=OWNER)

    assert resp.status_code == 201
    body = resp.json()
    assert body["artist"] == "artist-1"
    assert body["tracks"] == list(two_tracks)
    assert body["cover"] == ""
    assert body["createdAt"] and body["updatedAt"] and body["releaseDate"]
    assert len(collections.albums.docs) == 1


def test_create_album_requires_identity(client, two_tracks):
    payload = {"title": "Debut", "genre": "Rock", "artistAvatar": "http://a", "trackIds": list(two_tracks)}

    assert client.post("/albums", json=payload).status_code == 401


@pytest.mark.parametrize("missing", ["title", "genre", "artistAvatar", "trackIds"])
def test_create_album_missing_field_is_400(client, collections, two_tracks, missing):
    payload = {"title": "Debut", "genre": "Rock", "artistAvatar": "http://a", "trackIds": list(two_tracks)}
    payload.pop(missing)

    resp = client.post("/albums", json=payload, headers=OWNER)

    assert resp.status_code == 400
    assert collections.albums.docs == []


def test_create_album_with_empty_track_list_is_400(client, collections):
    payload = {"title": "Debut", "genre": "Rock", "artistAvatar": "http://a", "trackIds": []}

    assert client.post("/albums", json=payload, headers=OWNER).status_code == 400
    assert collections.albums.docs == []


@pytest.mark.parametrize("bad_id", [str(ObjectId()), "not-an-object-id"])
def test_create_album_with_unknown_track_is_404(client, collections, two_tracks, bad_id):
    payload = {
        "title": "Debut",
        "genre": "Rock",
        "artistAvatar": "http://a",
        "trackIds": [two_tracks[0], bad_id],
    }

    resp = client.post("/albums", json=payload, headers=OWNER)

    assert resp.status_code == 404
    assert collections.albums.docs == []


def test_list_albums_expands_tracks(client, album, two_tracks):
    resp = client.get("/albums")

    assert resp.status_code == 200
    albums = resp.json()["albums"]
    assert len(albums) == 1
    tracks = albums[0]["tracks"]
    assert [t["id"] for t in tracks] == list(two_tracks)
    assert tracks[0] == {"id": two_tracks[0], "title": "First", "artist": "Band", "duration": 200}
    assert tracks[1]["title"] == "Second"
    assert tracks[1]["duration"] == 150


def test_list_albums_filters_by_artist(client, album, two_tracks):
    other = {"title": "Other", "genre": "Pop", "artistAvatar": "http://b", "trackIds": [two_tracks[0]]}
    client.post("/albums", json=other, headers=STRANGER)

    albums = client.get("/albums", params={"artist": "artist-2"}).json()["albums"]

    assert [a["title"] for a in albums] == ["Other"]
    assert len(client.get("/albums").json()["albums"]) == 2


def test_owner_updates_only_sent_fields(client, album, two_tracks):
    resp = client.put(
        f"/albums/{album['id']}",
        json={"title": "Debut (Deluxe)", "trackIds": [two_tracks[1]]},
        headers=OWNER,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Debut (Deluxe)"
    assert body["genre"] == "Rock"
    assert body["tracks"] == [two_tracks[1]]


def test_update_with_empty_cover_keeps_cover(client, collections, album):
    client.put(f"/albums/{album['id']}", json={"cover": "http://c"}, headers=OWNER)

    for empty in ("", None):
        resp = client.put(f"/albums/{album['id']}", json={"cover": empty}, headers=OWNER)

        assert resp.status_code == 200
        assert resp.json()["cover"] == "http://c"
    assert collections.albums.docs[0]["cover"] == "http://c"


def test_update_ignores_empty_title_and_applies_other_fields(client, collections, album):
    resp = client.put(f"/albums/{album['id']}", json={"title": "", "genre": "Jazz"}, headers=OWNER)

    assert resp.status_code == 200
    assert resp.json()["title"] == "Debut"
    assert resp.json()["genre"] == "Jazz"
    assert collections.albums.docs[0]["title"] == "Debut"


def test_update_with_null_release_date_keeps_it(client, collections, album):
    original = collections.albums.docs[0]["releaseDate"]

    resp = client.put(f"/albums/{album['id']}", json={"releaseDate": None, "genre": ""}, headers=OWNER)

    assert resp.status_code == 200
    assert collections.albums.docs[0]["releaseDate"] == original
    assert collections.albums.docs[0]["genre"] == "Rock"


def test_create_album_with_repeated_track_id_is_404(client, collections, two_tracks):
    payload = {
        "title": "Debut",
        "genre": "Rock",
        "artistAvatar": "http://a",
        "trackIds": [two_tracks[0], two_tracks[0]],
    }

    resp = client.post("/albums", json=payload, headers=OWNER)

    assert resp.status_code == 404
    assert collections.albums.docs == []


def test_update_with_repeated_track_id_is_404(client, collections, album, two_tracks):
    resp = client.put(
        f"/albums/{album['id']}",
        json={"trackIds": [two_tracks[1], two_tracks[1]]},
        headers=OWNER,
    )

    assert resp.status_code == 404
    assert len(collections.albums.docs[0]["tracks"]) == 2


def test_update_with_unknown_track_is_404(client, collections, album, two_tracks):
    resp = client.put(
        f"/albums/{album['id']}",
        json={"trackIds": [two_tracks[0], str(ObjectId())]},
        headers=OWNER,
    )

    assert resp.status_code == 404
    assert len(collections.albums.docs[0]["tracks"]) == 2


def test_update_by_non_owner_is_403_and_unchanged(client, collections, album):
    resp = client.put(f"/albums/{album['id']}", json={"title": "Hijacked"}, headers=STRANGER)

    assert resp.status_code == 403
    assert collections.albums.docs[0]["title"] == "Debut"


def test_update_requires_identity(client, album):
    assert client.put(f"/albums/{album['id']}", json={"title": "X"}).status_code == 401


def test_update_unknown_album_is_404(client):
    assert client.put(f"/albums/{ObjectId()}", json={"title": "X"}, headers=OWNER).status_code == 404


def test_delete_by_non_owner_is_403(client, collections, album):
    resp = client.delete(f"/albums/{album['id']}", headers=STRANGER)

    assert resp.status_code == 403
    assert len(collections.albums.docs) == 1


def test_owner_deletes_album(client, collections, album):
    resp = client.delete(f"/albums/{album['id']}", headers=OWNER)

    assert resp.status_code == 200
    assert resp.json()["id"] == album["id"]
    assert collections.albums.docs == []
    # referenced tracks are left alone
    assert len(collections.tracks.docs) == 2


def test_delete_unknown_album_is_404(client):
    assert client.delete(f"/albums/{ObjectId()}", headers=OWNER).status_code == 404


def test_delete_requires_identity(client, album):
    assert client.delete(f"/albums/{album['id']}").status_code == 401
