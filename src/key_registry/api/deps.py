"""FastAPI dependencies."""

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from key_registry.store import ApiKeyStore


def get_store(request: Request) -> ApiKeyStore:
    """The record store created by the application lifespan."""
    return request.app.state.store


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.session_factory
