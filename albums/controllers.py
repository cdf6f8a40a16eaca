# backend/albums/controllers.py
from typing import List, Optional
import logging

from exceptions import (
    AudioHubError,
    AuthorizationError,
    NotFoundError,
    UnhandledError,
    ValidationError,
)
from models.album import Album, AlbumCreate, AlbumUpdate
from repositories.album_repository import (
    create_album,
    delete_album,
    find_album_document,
    list_albums,
    update_album,
)
from repositories.track_repository import count_existing_tracks, to_object_id

logger = logging.getLogger("albums.controllers")

# ============================================================
# 🔹 Track reference validation
# ============================================================
def resolve_track_ids(track_ids: Optional[List[str]]) -> list:
    """
    Converts the ids to ObjectIds, keeping their order, and checks that the
    number of stored tracks found equals the number of ids supplied, so a
    repeated id fails like an unknown one.
    """
    if not track_ids:
        raise ValidationError("trackIds must be a non-empty list.")
    object_ids = [to_object_id(t) for t in track_ids]
    if any(oid is None for oid in object_ids):
        raise NotFoundError("One or more tracks")
    found = count_existing_tracks(set(object_ids))
    if found != len(object_ids):
        logger.warning(f"⚠️ Unknown track ids in {track_ids} ({found} resolved)")
        raise NotFoundError("One or more tracks")
    return object_ids


def load_owned_album(album_id: str, user_id: str) -> dict:
    album = find_album_document(album_id)
    if not album:
        raise NotFoundError("Album", album_id)
    if album.get("artist") != user_id:
        logger.warning(f"⛔ {user_id} is not the owner of album {album_id}")
        raise AuthorizationError("Only the album's artist can modify it.")
    return album

# ============================================================
# 🔹 Create album
# ============================================================
def create_album_controller(user_id: str, payload: AlbumCreate) -> dict:
    if not (payload.title and payload.genre and payload.artistAvatar):
        raise ValidationError("Title, genre, artistAvatar and trackIds are required.")
    try:
        track_oids = resolve_track_ids(payload.trackIds)
        fields = {
            "title": payload.title,
            "artist": user_id,
            "artistAvatar": payload.artistAvatar,
            "genre": payload.genre,
            "cover": payload.cover or "",
            "tracks": track_oids,
        }
        if payload.releaseDate:
            fields["releaseDate"] = payload.releaseDate
        album = Album(**fields)
        return create_album(album.model_dump())
    except AudioHubError:
        raise
    except Exception:
        logger.exception("❌ Error creating album")
        raise UnhandledError("Error creating album.")

# ============================================================
# 🔹 List albums
# ============================================================
def list_albums_controller(artist: Optional[str] = None) -> dict:
    filters = {"artist": artist} if artist else {}
    try:
        albums = list_albums(filters)
    except Exception:
        logger.exception("❌ Error listing albums")
        raise UnhandledError("Error listing albums.")
    return {"albums": albums}

# ============================================================
# 🔹 Update album
# ============================================================
def update_album_controller(user_id: str, album_id: str, payload: AlbumUpdate) -> dict:
    """
    title, genre, releaseDate and cover are replaced only when a non-empty
    value is sent; empty strings and nulls leave them unchanged.
    trackIds, when sent, replaces the whole track list.
    """
    sent = payload.model_dump(exclude_unset=True)
    try:
        load_owned_album(album_id, user_id)

        update_data = {}
        for field in ("title", "genre", "releaseDate", "cover"):
            if sent.get(field):
                update_data[field] = sent[field]
        if sent.get("trackIds") is not None:
            update_data["tracks"] = resolve_track_ids(sent["trackIds"])

        updated = update_album(album_id, update_data)
    except AudioHubError:
        raise
    except Exception:
        logger.exception(f"❌ Error updating album {album_id}")
        raise UnhandledError("Error updating album.")

    if not updated:
        raise NotFoundError("Album", album_id)
    return updated

# ============================================================
# 🔹 Delete album
# ============================================================
def delete_album_controller(user_id: str, album_id: str) -> dict:
    try:
        load_owned_album(album_id, user_id)
        deleted = delete_album(album_id)
    except AudioHubError:
        raise
    except Exception:
        logger.exception(f"❌ Error deleting album {album_id}")
        raise UnhandledError("Error deleting album.")

    if not deleted:
        raise NotFoundError("Album", album_id)
    return {"message": "Album deleted successfully.", "id": album_id}
