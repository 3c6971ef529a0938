"""API key record endpoints."""

import logging

from fastapi import APIRouter, Depends, status

from key_registry.api.deps import get_store
from key_registry.api.schemas.records import DeleteResponse, ErrorResponse, RecordBody
from key_registry.errors import (
    InternalError,
    InvalidRequestError,
    MalformedIdError,
    PersistenceError,
    RecordNotFoundError,
)
from key_registry.store import ApiKeyRecord, ApiKeyStore

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["records"],
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)

# Values a path parameter arrives as when the client failed to substitute it
SENTINEL_IDS = frozenset({"undefined", "null", "[id]", "{id}"})


def validate_record_id(record_id: str | None) -> str:
    """Reject empty and placeholder ids before they reach the store."""
    if record_id is None or not record_id.strip() or record_id in SENTINEL_IDS:
        logger.warning("Rejected record id %r", record_id)
        raise InvalidRequestError("API key ID is required")
    return record_id


def validate_record_body(body: RecordBody | None) -> tuple[str, str]:
    if body is None or not body.name or not body.key:
        raise InvalidRequestError("Name and key are required")
    return body.name, body.key


@router.get("/records", response_model=list[ApiKeyRecord])
async def list_records(store: ApiKeyStore = Depends(get_store)):
    try:
        return await store.list_all()
    except PersistenceError as e:
        raise InternalError("Failed to fetch API keys", e.detail) from e


@router.post(
    "/records",
    response_model=ApiKeyRecord,
    status_code=status.HTTP_201_CREATED,
)
async def create_record(
    body: RecordBody | None = None,
    store: ApiKeyStore = Depends(get_store),
):
    name, key = validate_record_body(body)
    try:
        return await store.create(name, key)
    except PersistenceError as e:
        raise InternalError("Failed to create API key", e.detail) from e


@router.get(
    "/records/{record_id}",
    response_model=ApiKeyRecord,
    responses={404: {"model": ErrorResponse}},
)
async def get_record(record_id: str, store: ApiKeyStore = Depends(get_store)):
    record_id = validate_record_id(record_id)
    try:
        record = await store.get_by_id(record_id)
    except MalformedIdError as e:
        raise InvalidRequestError("Invalid API key ID format") from e
    except PersistenceError as e:
        raise InternalError("Failed to fetch API key", e.detail) from e

    if record is None:
        raise RecordNotFoundError("API key not found")
    return record


@router.put(
    "/records/{record_id}",
    response_model=ApiKeyRecord,
    responses={404: {"model": ErrorResponse}},
)
async def update_record(
    record_id: str,
    body: RecordBody | None = None,
    store: ApiKeyStore = Depends(get_store),
):
    record_id = validate_record_id(record_id)
    name, key = validate_record_body(body)
    try:
        record = await store.update(record_id, name, key)
    except MalformedIdError as e:
        raise InvalidRequestError("Invalid API key ID format") from e
    except PersistenceError as e:
        raise InternalError("Failed to update API key", e.detail) from e

    if record is None:
        raise RecordNotFoundError("API key not found")
    return record


@router.delete("/records/{record_id}", response_model=DeleteResponse)
async def delete_record(record_id: str, store: ApiKeyStore = Depends(get_store)):
    record_id = validate_record_id(record_id)
    try:
        await store.delete_by_id(record_id)
    except MalformedIdError as e:
        raise InvalidRequestError("Invalid API key ID format") from e
    except PersistenceError as e:
        raise InternalError("Failed to delete API key", e.detail) from e

    return DeleteResponse(success=True)
