# backend/albums/routes.py
from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from auth.identity import require_identity
from auth.models import Identity
from albums.controllers import (
    create_album_controller,
    delete_album_controller,
    list_albums_controller,
    update_album_controller,
)
from models.album import AlbumCreate, AlbumUpdate
import logging

router = APIRouter()
LOG = logging.getLogger("albums.routes")


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create an album")
def create_album_route(payload: AlbumCreate, identity: Identity = Depends(require_identity)):
    LOG.info(f"💿 Create album -> {payload.title!r} by {identity.user_id}")
    return create_album_controller(identity.user_id, payload)


@router.get("", summary="List albums with their tracks")
def list_albums_route(artist: Optional[str] = Query(None)):
    return list_albums_controller(artist)


@router.put("/{album_id}", summary="Update an album (owner only)")
def update_album_route(album_id: str, payload: AlbumUpdate,
                       identity: Identity = Depends(require_identity)):
    LOG.info(f"📝 Update album {album_id} by {identity.user_id}")
    return update_album_controller(identity.user_id, album_id, payload)


@router.delete("/{album_id}", summary="Delete an album (owner only)")
def delete_album_route(album_id: str, identity: Identity = Depends(require_identity)):
    LOG.info(f"🗑️ Delete album {album_id} by {identity.user_id}")
    return delete_album_controller(identity.user_id, album_id)
