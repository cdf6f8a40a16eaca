# backend/models/album.py
from bson import ObjectId
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class AlbumCreate(BaseModel):
    title: Optional[str] = None
    genre: Optional[str] = None
    artistAvatar: Optional[str] = None
    trackIds: Optional[List[str]] = None
    releaseDate: Optional[datetime] = None
    cover: Optional[str] = None


class AlbumUpdate(BaseModel):
    """Every field is optional; empty values are ignored."""
    title: Optional[str] = None
    genre: Optional[str] = None
    releaseDate: Optional[datetime] = None
    cover: Optional[str] = None
    trackIds: Optional[List[str]] = None


class Album(BaseModel):
    """Document stored in the `albums` collection."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    title: str
    artist: str
    artistAvatar: str
    genre: str
    releaseDate: datetime = Field(default_factory=datetime.utcnow)
    cover: str = ""
    tracks: List[ObjectId] = []
    createdAt: datetime = Field(default_factory=datetime.utcnow)
    updatedAt: datetime = Field(default_factory=datetime.utcnow)
