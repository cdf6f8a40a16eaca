# backend/models/track.py
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field
from typing import List


class AudioCategory(str, Enum):
    ROCK = "Rock"
    POP = "Pop"
    JAZZ = "Jazz"
    CLASSICAL = "Classical"
    HIP_HOP = "Hip-hop"
    ELECTRONIC = "Electronic"
    OTHER = "Other"


class Collaborator(BaseModel):
    role: str
    name: str


class Track(BaseModel):
    """Document stored in the `tracks` collection."""
    title: str
    description: str = ""
    artist: str
    artistAvatar: str
    album: str = ""
    genre: str = ""
    duration: float = Field(gt=0)  # seconds
    releaseDate: datetime = Field(default_factory=datetime.utcnow)
    copyright: str = ""
    collaborators: List[Collaborator] = []
    trackNumber: int = 1
    totalTracks: int = 1
    url: str
    cover: str = ""
    createdAt: datetime = Field(default_factory=datetime.utcnow)
    producer: str = ""
    composer: str = ""
    category: AudioCategory = AudioCategory.OTHER
    playCount: int = Field(default=0, ge=0)

    def to_document(self) -> dict:
        doc = self.model_dump()
        doc["category"] = self.category.value
        return doc
