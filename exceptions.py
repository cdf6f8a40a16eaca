# backend/exceptions.py
from fastapi import HTTPException
from typing import Any, Dict, Optional


class AudioHubError(HTTPException):
    """Base error for the AudioHub API."""
    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ValidationError(AudioHubError):
    """Missing or invalid input."""
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class AuthenticationError(AudioHubError):
    """No caller identity could be established."""
    def __init__(self, detail: str = "User not authenticated"):
        super().__init__(status_code=401, detail=detail)


class AuthorizationError(AudioHubError):
    """Identity present, but it does not own the resource."""
    def __init__(self, detail: str = "Not authorized"):
        super().__init__(status_code=403, detail=detail)


class NotFoundError(AudioHubError):
    def __init__(self, resource: str, resource_id: Any = None):
        if resource_id is None:
            detail = f"{resource} not found"
        else:
            detail = f"{resource} with id {resource_id} not found"
        super().__init__(status_code=404, detail=detail)


class UnhandledError(AudioHubError):
    """Any other failure, external store faults included."""
    def __init__(self, detail: str = "Internal error"):
        super().__init__(status_code=500, detail=detail)
