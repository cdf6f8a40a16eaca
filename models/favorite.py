# backend/models/favorite.py
from bson import ObjectId
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class Favorite(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    userId: str
    audioId: ObjectId
    createdAt: datetime = Field(default_factory=datetime.utcnow)
