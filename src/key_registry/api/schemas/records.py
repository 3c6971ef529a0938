"""API key record schemas."""

from pydantic import BaseModel


class RecordBody(BaseModel):
    # Optional here so a missing field gets the same 400 as an empty one
    name: str | None = None
    key: str | None = None


class DeleteResponse(BaseModel):
    success: bool


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None

