# test/conftest.py
import copy
import types
from datetime import datetime, timedelta

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from config import settings


# ------------------------------------------------------------
# In-memory stand-in for a pymongo collection
# ------------------------------------------------------------
def _matches(doc, filters):
    for key, expected in (filters or {}).items():
        value = doc.get(key)
        if isinstance(expected, dict) and "$in" in expected:
            if value not in expected["$in"]:
                return False
        elif value != expected:
            return False
    return True


def _project(doc, projection):
    if not projection:
        return copy.deepcopy(doc)
    keep = {k for k, v in projection.items() if v}
    out = {k: copy.deepcopy(v) for k, v in doc.items() if k in keep}
    if projection.get("_id", 1):
        out["_id"] = doc["_id"]
    return out


class FakeCursor:
    def __init__(self, docs, projection):
        self._docs = list(docs)
        self._projection = projection
        self._skip = 0
        self._limit = 0

    def sort(self, key, direction=1):
        self._docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def skip(self, n):
        self._skip = n
        return self

    def limit(self, n):
        self._limit = n
        return self

    def __iter__(self):
        docs = self._docs[self._skip:]
        if self._limit:
            docs = docs[:self._limit]
        return iter([_project(d, self._projection) for d in docs])


class FakeCollection:
    def __init__(self):
        self.docs = []

    def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return types.SimpleNamespace(inserted_id=doc["_id"])

    def find(self, filters=None, projection=None):
        return FakeCursor([d for d in self.docs if _matches(d, filters)], projection)

    def find_one(self, filters=None, projection=None):
        for d in self.docs:
            if _matches(d, filters):
                return _project(d, projection)
        return None

    def count_documents(self, filters, limit=None):
        count = sum(1 for d in self.docs if _matches(d, filters))
        return min(count, limit) if limit else count

    def find_one_and_update(self, filters, update, projection=None, return_document=None):
        for d in self.docs:
            if _matches(d, filters):
                for key, amount in update.get("$inc", {}).items():
                    d[key] = d.get(key, 0) + amount
                for key, value in update.get("$set", {}).items():
                    d[key] = copy.deepcopy(value)
                return _project(d, projection)
        return None

    def delete_one(self, filters):
        for i, d in enumerate(self.docs):
            if _matches(d, filters):
                del self.docs[i]
                return types.SimpleNamespace(deleted_count=1)
        return types.SimpleNamespace(deleted_count=0)

    def create_index(self, *args, **kwargs):
        return "fake_index"


class FakeObjectStore:
    """Records uploads instead of talking to a bucket."""
    def __init__(self):
        self.uploads = []

    def upload_bytes(self, remote_key, data, content_type="audio/mpeg"):
        self.uploads.append({"key": remote_key, "data": data, "content_type": content_type})

    def get_public_url(self, remote_key):
        return f"https://cdn.example.test/{remote_key}"


# ------------------------------------------------------------
# Fixtures
# ------------------------------------------------------------
@pytest.fixture
def collections(monkeypatch):
    from repositories import album_repository, favorite_repository, track_repository

    colls = types.SimpleNamespace(
        tracks=FakeCollection(),
        albums=FakeCollection(),
        favorites=FakeCollection(),
    )
    monkeypatch.setattr(track_repository, "TRACKS_COLLECTION", colls.tracks)
    monkeypatch.setattr(album_repository, "ALBUMS_COLLECTION", colls.albums)
    monkeypatch.setattr(favorite_repository, "COLL", colls.favorites)
    return colls


@pytest.fixture
def object_store(monkeypatch):
    from audio import controllers

    store = FakeObjectStore()
    monkeypatch.setattr(controllers, "get_object_store", lambda: store)
    return store


@pytest.fixture
def client(collections, object_store, monkeypatch):
    monkeypatch.setattr(settings, "AUTH_MODE", "header")
    from main import app
    return TestClient(app)


@pytest.fixture
def seed_track(collections):
    """Inserts a track document directly; later calls get later createdAt values."""
    base = datetime(2024, 1, 1)
    counter = {"n": 0}

    def _seed(**fields):
        counter["n"] += 1
        doc = {
            "title": f"Track {counter['n']}",
            "description": "",
            "artist": "Artist",
            "artistAvatar": "http://avatar",
            "album": "",
            "genre": "",
            "duration": 180,
            "releaseDate": base,
            "copyright": "",
            "collaborators": [],
            "trackNumber": 1,
            "totalTracks": 1,
            "url": f"https://cdn.example.test/audio/{counter['n']}.mp3",
            "cover": "",
            "createdAt": base + timedelta(minutes=counter["n"]),
            "producer": "",
            "composer": "",
            "category": "Other",
            "playCount": 0,
        }
        doc.update(fields)
        collections.tracks.insert_one(doc)
        return str(doc["_id"])

    return _seed


UPLOAD_FIELDS = {
    "title": "Song",
    "artist": "Artist",
    "artistAvatar": "http://a",
    "duration": "180",
}


@pytest.fixture
def upload():
    def _upload(client, data=None, file_bytes=b"ID3fake-mp3-bytes", filename="song.mp3",
                content_type="audio/mpeg"):
        form = dict(UPLOAD_FIELDS if data is None else data)
        files = None
        if file_bytes is not None:
            files = {"audioFile": (filename, file_bytes, content_type)}
        return client.post("/upload", data=form, files=files)
    return _upload
