# backend/audio/controllers.py
from datetime import datetime, timezone
from typing import Dict, List, Optional
import json
import logging
import math
import re

from pydantic import ValidationError as PydanticValidationError

from config import settings
from exceptions import AudioHubError, NotFoundError, UnhandledError, ValidationError
from models.favorite import Favorite
from models.track import AudioCategory, Collaborator, Track
from repositories.favorite_repository import (
    delete_favorite,
    find_favorite,
    get_favorite_audio_ids,
    insert_favorite,
)
from repositories.track_repository import (
    LIST_PROJECTION,
    create_track,
    find_tracks,
    get_track_by_id,
    get_tracks_by_ids,
    increment_play_count,
    to_object_id,
    track_exists,
)
from storage.object_store import build_audio_key, get_object_store

logger = logging.getLogger("audio.controllers")

REQUIRED_UPLOAD_FIELDS = ("title", "artist", "artistAvatar", "duration")
LIST_FILTER_FIELDS = ("artist", "genre", "album", "category")
LEADING_INT = re.compile(r"\s*[+-]?\d+")
# keeps (page - 1) * limit inside the int64 skip Mongo accepts
MAX_PAGE_PARAM = 1_000_000_000

# ============================================================
# 🔹 Form parsing
# ============================================================
def parse_duration(raw: str) -> float:
    try:
        duration = float(raw)
    except (TypeError, ValueError):
        raise ValidationError("Duration must be a number of seconds.")
    if not math.isfinite(duration) or duration <= 0:
        raise ValidationError("Duration must be a positive number of seconds.")
    return duration


def parse_optional_int(raw: Optional[str], field: str, default: int) -> int:
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer.")


def parse_release_date(raw: Optional[str]) -> datetime:
    if not raw:
        return datetime.utcnow()
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError("releaseDate must be an ISO-8601 date.")
    # stored naive, in UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_category(raw: Optional[str]) -> AudioCategory:
    if not raw:
        return AudioCategory.OTHER
    try:
        return AudioCategory(raw)
    except ValueError:
        allowed = ", ".join(c.value for c in AudioCategory)
        raise ValidationError(f"Unknown category '{raw}'. Allowed: {allowed}.")


def parse_collaborators(raw: Optional[str]) -> List[Collaborator]:
    """Collaborators arrive as a JSON array of {role, name} inside a form field."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError("not a list")
        return [Collaborator(**item) for item in data]
    except (ValueError, TypeError, PydanticValidationError):
        raise ValidationError("collaborators must be a JSON list of {role, name} objects.")


def parse_page_param(raw: Optional[str], default: int) -> int:
    """
    Reads the leading integer of the text ("5.5" -> 5, "2abc" -> 2); anything
    without one, below 1 or above MAX_PAGE_PARAM falls back to the default.
    """
    match = LEADING_INT.match(raw or "")
    if not match:
        return default
    value = int(match.group())
    return value if 1 <= value <= MAX_PAGE_PARAM else default

# ============================================================
# 🔹 Upload audio
# ============================================================
def upload_audio(fields: Dict[str, Optional[str]], audio_bytes: Optional[bytes],
                 content_type: Optional[str] = None) -> dict:
    """
    Validates the form, pushes the audio to the object store, then persists
    the track. No rollback of the blob if the database write fails.
    """
    missing = [f for f in REQUIRED_UPLOAD_FIELDS if not fields.get(f)]
    if missing:
        logger.warning(f"⚠️ Upload rejected, missing fields: {missing}")
        raise ValidationError("Title, artist, artistAvatar and duration are required.")
    if not audio_bytes:
        logger.warning("⚠️ Upload rejected, no audio file")
        raise ValidationError("No audio file was uploaded.")

    duration = parse_duration(fields["duration"])
    category = parse_category(fields.get("category"))
    release_date = parse_release_date(fields.get("releaseDate"))
    track_number = parse_optional_int(fields.get("trackNumber"), "trackNumber", 1)
    total_tracks = parse_optional_int(fields.get("totalTracks"), "totalTracks", 1)
    collaborators = parse_collaborators(fields.get("collaborators"))

    if not content_type or not content_type.startswith("audio/"):
        content_type = "audio/mpeg"

    try:
        store = get_object_store()
        key = build_audio_key(fields["title"])
        store.upload_bytes(key, audio_bytes, content_type=content_type)
        url = store.get_public_url(key)

        track = Track(
            title=fields["title"],
            description=fields.get("description") or "",
            artist=fields["artist"],
            artistAvatar=fields["artistAvatar"],
            album=fields.get("album") or "",
            genre=fields.get("genre") or "",
            duration=duration,
            releaseDate=release_date,
            copyright=fields.get("copyright") or "",
            collaborators=collaborators,
            trackNumber=track_number,
            totalTracks=total_tracks,
            url=url,
            cover=fields.get("cover") or "",
            producer=fields.get("producer") or "",
            composer=fields.get("composer") or "",
            category=category,
        )
        created = create_track(track.to_document())
    except Exception:
        logger.exception("❌ Error processing the upload")
        raise UnhandledError("Error processing the upload.")

    return {"message": "Audio uploaded successfully!", "audio": created}

# ============================================================
# 🔹 List audios
# ============================================================
def list_audios(query: Dict[str, Optional[str]]) -> dict:
    page = parse_page_param(query.get("page"), settings.DEFAULT_PAGE)
    limit = parse_page_param(query.get("limit"), settings.DEFAULT_PAGE_LIMIT)
    filters = {f: query[f] for f in LIST_FILTER_FIELDS if query.get(f)}

    try:
        items, total = find_tracks(filters, page, limit)
    except Exception:
        logger.exception("❌ Error fetching audios")
        raise UnhandledError("Error fetching audios.")

    return {
        "page": page,
        "totalPages": math.ceil(total / limit),
        "totalItems": total,
        "items": items,
    }

# ============================================================
# 🔹 Get single audio
# ============================================================
def fetch_audio(audio_id: str) -> dict:
    try:
        track = get_track_by_id(audio_id)
    except Exception:
        logger.exception(f"❌ Error fetching audio {audio_id}")
        raise UnhandledError("Error fetching audio.")
    if not track:
        raise NotFoundError("Audio", audio_id)
    return track

# ============================================================
# 🔹 Play counter
# ============================================================
def register_play(audio_id: str) -> dict:
    try:
        play_count = increment_play_count(audio_id)
    except Exception:
        logger.exception(f"❌ Error incrementing play count for {audio_id}")
        raise UnhandledError("Error registering play.")
    if play_count is None:
        logger.warning(f"⚠️ Play for unknown audio: {audio_id}")
        raise NotFoundError("Audio", audio_id)
    return {"playCount": play_count}

# ============================================================
# 🔹 Favorites
# ============================================================
def add_favorite(user_id: str, audio_id: str):
    """Returns (status_code, body): 201 when created, 200 when it already existed."""
    try:
        if not track_exists(audio_id):
            raise NotFoundError("Audio", audio_id)
        oid = to_object_id(audio_id)
        existing = find_favorite(user_id, oid)
        if existing:
            return 200, {"message": "Audio already in favorites.", "favorite": existing}
        favorite = insert_favorite(Favorite(userId=user_id, audioId=oid).model_dump())
        return 201, {"message": "Audio added to favorites.", "favorite": favorite}
    except AudioHubError:
        raise
    except Exception:
        logger.exception(f"❌ Error adding favorite {audio_id} for {user_id}")
        raise UnhandledError("Error adding favorite.")


def remove_favorite(user_id: str, audio_id: str) -> dict:
    oid = to_object_id(audio_id)
    if oid is None:
        raise NotFoundError("Favorite", audio_id)
    try:
        deleted = delete_favorite(user_id, oid)
    except Exception:
        logger.exception(f"❌ Error removing favorite {audio_id} for {user_id}")
        raise UnhandledError("Error removing favorite.")
    if not deleted:
        raise NotFoundError("Favorite", audio_id)
    return {"message": "Audio removed from favorites.", "id": audio_id}


def list_favorites(user_id: str) -> dict:
    try:
        audio_ids = get_favorite_audio_ids(user_id)
        favorites = get_tracks_by_ids(audio_ids, LIST_PROJECTION)
    except Exception:
        logger.exception(f"❌ Error listing favorites for {user_id}")
        raise UnhandledError("Error listing favorites.")
    return {"favorites": favorites}
