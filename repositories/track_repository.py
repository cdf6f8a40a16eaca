# backend/repositories/track_repository.py
from database.connection import music_db
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging

logger = logging.getLogger("repositories.tracks")

# ============================================================
# 🗂️ Tracks collection
# ============================================================
TRACKS_COLLECTION = music_db["tracks"]

# Fields returned by the paginated listing
LIST_PROJECTION = {
    "title": 1,
    "artist": 1,
    "album": 1,
    "genre": 1,
    "playCount": 1,
    "url": 1,
    "cover": 1,
    "composer": 1,
}

# Fields returned when a track is embedded in an album
ALBUM_TRACK_PROJECTION = {"title": 1, "artist": 1, "duration": 1}

# ============================================================
# 🔹 Helpers
# ============================================================
def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parses an id coming from a client; None when it is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def serialize_track(doc: dict) -> Optional[Dict]:
    """Turns a Mongo document into a JSON serializable dict."""
    if not doc:
        return None
    track = dict(doc)
    track["id"] = str(track.get("_id"))
    track.pop("_id", None)
    return track

# ============================================================
# 🔹 Create track
# ============================================================
def create_track(track_doc: dict) -> Dict:
    track_doc = dict(track_doc)
    result = TRACKS_COLLECTION.insert_one(track_doc)
    track_doc["_id"] = result.inserted_id
    logger.info(f"✅ Track created: {track_doc.get('title')} ({result.inserted_id})")
    return serialize_track(track_doc)

# ============================================================
# 🔹 Paginated listing
# ============================================================
def find_tracks(filters: Dict[str, Any], page: int, limit: int) -> Tuple[List[Dict], int]:
    """
    Returns the requested page of tracks matching every filter exactly,
    newest first, together with the total number of matches.
    """
    cursor = (
        TRACKS_COLLECTION.find(filters, LIST_PROJECTION)
        .sort("createdAt", DESCENDING)
        .skip((page - 1) * limit)
        .limit(limit)
    )
    items = [serialize_track(doc) for doc in cursor]
    total = TRACKS_COLLECTION.count_documents(filters)
    return items, total

# ============================================================
# 🔹 Get track by ID
# ============================================================
def get_track_by_id(track_id: str) -> Optional[Dict]:
    obj_id = to_object_id(track_id)
    if obj_id is None:
        logger.warning(f"⚠️ Invalid track id: {track_id}")
        return None
    return serialize_track(TRACKS_COLLECTION.find_one({"_id": obj_id}))


def track_exists(track_id: str) -> bool:
    obj_id = to_object_id(track_id)
    if obj_id is None:
        return False
    return TRACKS_COLLECTION.count_documents({"_id": obj_id}, limit=1) > 0

# ============================================================
# 🔹 Bulk lookups (album references)
# ============================================================
def count_existing_tracks(object_ids: Iterable[ObjectId]) -> int:
    ids = list(object_ids)
    if not ids:
        return 0
    return TRACKS_COLLECTION.count_documents({"_id": {"$in": ids}})


def get_tracks_by_ids(object_ids: Iterable[ObjectId], projection: Optional[dict] = None) -> List[Dict]:
    """Fetches the referenced tracks keeping the order of `object_ids`; unknown ids are dropped."""
    ids = list(object_ids)
    if not ids:
        return []
    found = {
        doc["_id"]: serialize_track(doc)
        for doc in TRACKS_COLLECTION.find({"_id": {"$in": ids}}, projection)
    }
    return [found[oid] for oid in ids if oid in found]

# ============================================================
# 🔹 Play counter
# ============================================================
def increment_play_count(track_id: str) -> Optional[int]:
    """Atomic $inc on the store side; None when the track does not exist."""
    obj_id = to_object_id(track_id)
    if obj_id is None:
        return None
    doc = TRACKS_COLLECTION.find_one_and_update(
        {"_id": obj_id},
        {"$inc": {"playCount": 1}},
        projection={"playCount": 1},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        return None
    return doc["playCount"]
