"""User ORM model. Identified only by a salted email hash."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from tresor.core.constants import TAG_LENGTH
from tresor.infrastructure.persistence.database import Base


class User(Base):
    """Author of entry writes. Table: tresor_user. Created lazily, never updated."""

    __tablename__ = "tresor_user"

    email_hash: Mapped[str] = mapped_column(String(TAG_LENGTH), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
