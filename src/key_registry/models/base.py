import uuid
from datetime import datetime, timezone
from typing import Annotated

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Reusable annotated types for common column patterns.
# Python-side defaults keep the models usable on SQLite; the migration adds
# the matching Postgres server defaults.
uuid_pk = Annotated[
    uuid.UUID,
    mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    ),
]

created_at = Annotated[
    datetime,
    mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    ),
]


class Base(DeclarativeBase):
    pass
