"""Entry and EntryUpdate ORM models.

Entry holds the current value per tag. EntryUpdate is the UPDATED edge
(user -> entry) kept for every write; Entry.value/ts_updated always equal
the newest EntryUpdate for that tag.
"""

from sqlalchemy import BigInteger, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tresor.core.constants import TAG_LENGTH
from tresor.infrastructure.persistence.database import Base
from tresor.shared.utils.generators import UPDATE_ID_LENGTH, generate_update_id


class Entry(Base):
    """Current value for one tag. Table: entry. Never deleted; value None means cleared."""

    __tablename__ = "entry"

    tag: Mapped[str] = mapped_column(String(TAG_LENGTH), primary_key=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
    ts_updated: Mapped[int] = mapped_column(BigInteger, nullable=False)


class EntryUpdate(Base):
    """One write of an entry by a user (audit history). Table: entry_update."""

    __tablename__ = "entry_update"

    id: Mapped[str] = mapped_column(
        String(UPDATE_ID_LENGTH), primary_key=True, default=generate_update_id
    )
    user_email_hash: Mapped[str] = mapped_column(
        String(TAG_LENGTH),
        ForeignKey("tresor_user.email_hash", ondelete="RESTRICT"),
        nullable=False,
    )
    entry_tag: Mapped[str] = mapped_column(
        String(TAG_LENGTH),
        ForeignKey("entry.tag", ondelete="RESTRICT"),
        nullable=False,
    )
    ts: Mapped[int] = mapped_column(BigInteger, nullable=False)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_entry_update_entry_tag_ts", "entry_tag", "ts"),
        Index("ix_entry_update_user_email_hash", "user_email_hash"),
    )
