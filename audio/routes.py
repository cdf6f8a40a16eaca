# backend/audio/routes.py
from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from typing import Optional
from auth.identity import require_identity
from auth.models import Identity
from audio.controllers import (
    add_favorite,
    fetch_audio,
    list_audios,
    list_favorites,
    register_play,
    remove_favorite,
    upload_audio,
)
import logging

router = APIRouter()
LOG = logging.getLogger("audio.routes")

# ============================================================
# 🔹 Upload audio (multipart)
# ============================================================
@router.post("/upload", status_code=status.HTTP_201_CREATED, summary="Upload an audio file with metadata")
def upload_route(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    artist: Optional[str] = Form(None),
    artist_avatar: Optional[str] = Form(None, alias="artistAvatar"),
    album: Optional[str] = Form(None),
    genre: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    release_date: Optional[str] = Form(None, alias="releaseDate"),
    copyright: Optional[str] = Form(None),
    producer: Optional[str] = Form(None),
    composer: Optional[str] = Form(None),
    track_number: Optional[str] = Form(None, alias="trackNumber"),
    total_tracks: Optional[str] = Form(None, alias="totalTracks"),
    cover: Optional[str] = Form(None),
    collaborators: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    audio_file: Optional[UploadFile] = File(None, alias="audioFile"),
):
    LOG.info(f"🎵 Upload request -> title={title!r} artist={artist!r}")
    fields = {
        "title": title,
        "description": description,
        "artist": artist,
        "artistAvatar": artist_avatar,
        "album": album,
        "genre": genre,
        "duration": duration,
        "releaseDate": release_date,
        "copyright": copyright,
        "producer": producer,
        "composer": composer,
        "trackNumber": track_number,
        "totalTracks": total_tracks,
        "cover": cover,
        "collaborators": collaborators,
        "category": category,
    }
    audio_bytes = audio_file.file.read() if audio_file is not None else None
    content_type = audio_file.content_type if audio_file is not None else None
    return upload_audio(fields, audio_bytes, content_type)

# ============================================================
# 🔹 List audios (filters + pagination)
# ============================================================
@router.get("/audios", summary="List audios with filters and pagination")
def list_audios_route(
    artist: Optional[str] = Query(None),
    genre: Optional[str] = Query(None),
    album: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
):
    return list_audios({
        "artist": artist,
        "genre": genre,
        "album": album,
        "category": category,
        "page": page,
        "limit": limit,
    })

# ============================================================
# 🔹 Get audio by ID
# ============================================================
@router.get("/audios/{audio_id}", summary="Get one audio by ID")
def get_audio_route(audio_id: str):
    return fetch_audio(audio_id)

# ============================================================
# 🔹 Register a play
# ============================================================
@router.post("/audios/{audio_id}/play", summary="Increment the play count")
def play_route(audio_id: str):
    LOG.info(f"▶️ Play -> {audio_id}")
    return register_play(audio_id)

# ============================================================
# 🔹 Favorites
# ============================================================
@router.post("/audios/{audio_id}/favorite", status_code=status.HTTP_201_CREATED,
             summary="Add an audio to the caller's favorites")
def add_favorite_route(audio_id: str, response: Response,
                       identity: Identity = Depends(require_identity)):
    status_code, body = add_favorite(identity.user_id, audio_id)
    response.status_code = status_code
    return body


@router.delete("/audios/{audio_id}/favorite", summary="Remove an audio from the caller's favorites")
def remove_favorite_route(audio_id: str, identity: Identity = Depends(require_identity)):
    return remove_favorite(identity.user_id, audio_id)


@router.get("/favorites", summary="List the caller's favorite audios")
def list_favorites_route(identity: Identity = Depends(require_identity)):
    return list_favorites(identity.user_id)
