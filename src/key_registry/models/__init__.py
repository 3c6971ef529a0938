"""SQLAlchemy ORM models - import all models here for Alembic discovery."""

from key_registry.models.base import Base
from key_registry.models.api_key import ApiKey

__all__ = [
    "Base",
    "ApiKey",
]
