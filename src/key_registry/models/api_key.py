from sqlalchemy import Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from key_registry.models.base import Base, uuid_pk, created_at


class ApiKey(Base):
    __tablename__ = "api_keys"
    __table_args__ = (Index("api_keys_created_at_idx", "created_at"),)

    id: Mapped[uuid_pk]
    name: Mapped[str] = mapped_column(Text, nullable=False)
    key: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[created_at]
