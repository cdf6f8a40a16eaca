# backend/repositories/album_repository.py
from database.connection import music_db
from datetime import datetime
from pymongo import DESCENDING, ReturnDocument
from repositories.track_repository import (
    ALBUM_TRACK_PROJECTION,
    get_tracks_by_ids,
    to_object_id,
)
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger("repositories.albums")

# ============================================================
# 🗂️ Albums collection
# ============================================================
ALBUMS_COLLECTION = music_db["albums"]

# ============================================================
# 🔹 Serialize album
# ============================================================
def serialize_album(doc: dict, expand_tracks: bool = False) -> Optional[dict]:
    """
    Converts a Mongo document into an API-ready album.
    With `expand_tracks` the referenced tracks are embedded as
    {id, title, artist, duration}; otherwise `tracks` holds the ids.
    """
    if not doc:
        return None
    album = dict(doc)
    album["id"] = str(album.pop("_id"))
    track_ids = album.get("tracks") or []
    if expand_tracks:
        album["tracks"] = get_tracks_by_ids(track_ids, ALBUM_TRACK_PROJECTION)
    else:
        album["tracks"] = [str(t) for t in track_ids]
    return album

# ============================================================
# 🔹 Create album
# ============================================================
def create_album(album_doc: dict) -> dict:
    album_doc = dict(album_doc)
    result = ALBUMS_COLLECTION.insert_one(album_doc)
    album_doc["_id"] = result.inserted_id
    logger.info(f"✅ Album created: {album_doc.get('title')} ({result.inserted_id})")
    return serialize_album(album_doc)

# ============================================================
# 🔹 List albums
# ============================================================
def list_albums(filters: Dict[str, Any]) -> List[dict]:
    cursor = ALBUMS_COLLECTION.find(filters).sort("createdAt", DESCENDING)
    return [serialize_album(doc, expand_tracks=True) for doc in cursor]

# ============================================================
# 🔹 Get album by ID (raw document)
# ============================================================
def find_album_document(album_id: str) -> Optional[dict]:
    obj_id = to_object_id(album_id)
    if obj_id is None:
        logger.warning(f"⚠️ Invalid album id: {album_id}")
        return None
    return ALBUMS_COLLECTION.find_one({"_id": obj_id})

# ============================================================
# 🔹 Update album
# ============================================================
def update_album(album_id: str, update_data: Dict[str, Any]) -> Optional[dict]:
    """Applies a $set and returns the updated album, or None if it vanished."""
    obj_id = to_object_id(album_id)
    if obj_id is None:
        return None
    update_data = dict(update_data)
    update_data["updatedAt"] = datetime.utcnow()
    doc = ALBUMS_COLLECTION.find_one_and_update(
        {"_id": obj_id},
        {"$set": update_data},
        return_document=ReturnDocument.AFTER,
    )
    if doc:
        logger.info(f"📝 Album updated: {album_id} -> {sorted(update_data)}")
    return serialize_album(doc)

# ============================================================
# 🔹 Delete album
# ============================================================
def delete_album(album_id: str) -> bool:
    obj_id = to_object_id(album_id)
    if obj_id is None:
        return False
    result = ALBUMS_COLLECTION.delete_one({"_id": obj_id})
    if result.deleted_count > 0:
        logger.info(f"🗑️ Album deleted: {album_id}")
        return True
    logger.warning(f"⚠️ No album to delete: {album_id}")
    return False
