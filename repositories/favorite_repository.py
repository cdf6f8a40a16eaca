# backend/repositories/favorite_repository.py
from database.connection import music_db
from bson import ObjectId
from pymongo import DESCENDING
from typing import List, Optional
import logging

LOG = logging.getLogger("repositories.favorites")

COLL = music_db["favorites"]


def serialize_favorite(doc: dict) -> Optional[dict]:
    if not doc:
        return None
    fav = dict(doc)
    fav["id"] = str(fav.pop("_id"))
    fav["audioId"] = str(fav["audioId"])
    return fav


def find_favorite(user_id: str, audio_id: ObjectId) -> Optional[dict]:
    return serialize_favorite(COLL.find_one({"userId": user_id, "audioId": audio_id}))


def insert_favorite(favorite_doc: dict) -> dict:
    favorite_doc = dict(favorite_doc)
    res = COLL.insert_one(favorite_doc)
    favorite_doc["_id"] = res.inserted_id
    LOG.info("Inserted favorite %s for user %s", str(res.inserted_id), favorite_doc.get("userId"))
    return serialize_favorite(favorite_doc)


def delete_favorite(user_id: str, audio_id: ObjectId) -> bool:
    res = COLL.delete_one({"userId": user_id, "audioId": audio_id})
    return res.deleted_count > 0


def get_favorite_audio_ids(user_id: str) -> List[ObjectId]:
    """Track ids the user has favorited, newest first."""
    rows = COLL.find({"userId": user_id}, {"audioId": 1}).sort("createdAt", DESCENDING)
    return [r["audioId"] for r in rows]
