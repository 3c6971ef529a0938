"""Record store: the only code that addresses the ``api_keys`` table."""

import logging
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from key_registry.errors import MalformedIdError, PersistenceError
from key_registry.models import ApiKey

logger = logging.getLogger(__name__)


class ApiKeyRecord(BaseModel):
    """External representation of one row of ``api_keys``."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    key: str
    created_at: datetime = Field(alias="createdAt")


def record_from_row(row: ApiKey) -> ApiKeyRecord:
    return ApiKeyRecord(
        id=str(row.id),
        name=row.name,
        key=row.key,
        created_at=row.created_at,
    )


def parse_record_id(record_id: str | uuid.UUID) -> uuid.UUID:
    if isinstance(record_id, uuid.UUID):
        return record_id
    try:
        return uuid.UUID(str(record_id))
    except ValueError:
        raise MalformedIdError(str(record_id)) from None


# Drivers raise connection failures (refused, DNS, timeout) as bare OSError
_DATABASE_ERRORS = (SQLAlchemyError, OSError)


def _error_detail(exc: Exception) -> str:
    # DBAPIError wraps the driver exception; its message is the useful part
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class ApiKeyStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    def _persistence_error(self, operation: str, exc: Exception) -> PersistenceError:
        detail = _error_detail(exc)
        logger.error("Error %s: %s", operation, detail)
        return PersistenceError(operation, detail)

    async def list_all(self) -> list[ApiKeyRecord]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(ApiKey).order_by(ApiKey.created_at.desc())
                )
                return [record_from_row(row) for row in result.scalars().all()]
        except _DATABASE_ERRORS as e:
            raise self._persistence_error("fetching API keys", e) from e

    async def get_by_id(self, record_id: str) -> ApiKeyRecord | None:
        key_id = parse_record_id(record_id)
        try:
            async with self._session_factory() as session:
                row = await session.get(ApiKey, key_id)
                return record_from_row(row) if row is not None else None
        except _DATABASE_ERRORS as e:
            raise self._persistence_error("fetching API key", e) from e

    async def create(self, name: str, key: str) -> ApiKeyRecord:
        try:
            async with self._session_factory() as session:
                row = ApiKey(name=name, key=key)
                session.add(row)
                await session.commit()
                await session.refresh(row)
        except _DATABASE_ERRORS as e:
            raise self._persistence_error("creating API key", e) from e

        logger.info("Created API key %s", row.id)
        return record_from_row(row)

    async def update(self, record_id: str, name: str, key: str) -> ApiKeyRecord | None:
        key_id = parse_record_id(record_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    update(ApiKey)
                    .where(ApiKey.id == key_id)
                    .values(name=name, key=key)
                    .returning(ApiKey)
                )
                row = result.scalar_one_or_none()
                await session.commit()
        except _DATABASE_ERRORS as e:
            raise self._persistence_error("updating API key", e) from e

        if row is None:
            return None
        logger.info("Updated API key %s", row.id)
        return record_from_row(row)

    async def delete_by_id(self, record_id: str) -> bool:
        """Delete the row if present. Deleting a missing id still succeeds."""
        key_id = parse_record_id(record_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(delete(ApiKey).where(ApiKey.id == key_id))
                await session.commit()
        except _DATABASE_ERRORS as e:
            raise self._persistence_error("deleting API key", e) from e

        logger.info("Deleted API key %s (%d row(s))", key_id, result.rowcount)
        return True

    async def count(self) -> int:
        try:
            async with self._session_factory() as session:
                total = await session.scalar(select(func.count()).select_from(ApiKey))
                return int(total or 0)
        except _DATABASE_ERRORS as e:
            raise self._persistence_error("counting API keys", e) from e

    async def sample(self, limit: int) -> list[ApiKeyRecord]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(ApiKey).limit(limit))
                return [record_from_row(row) for row in result.scalars().all()]
        except _DATABASE_ERRORS as e:
            raise self._persistence_error("reading API keys", e) from e
