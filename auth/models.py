# backend/auth/models.py
from pydantic import BaseModel


class Identity(BaseModel):
    user_id: str
