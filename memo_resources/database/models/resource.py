from sqlalchemy import String, ForeignKey, Integer, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from memo_resources.database.database import Base, unix_now

if TYPE_CHECKING:
    from memo_resources.database.models.user import User
    from memo_resources.database.models.memo import Memo


class Resource(Base):
    __tablename__ = "resources"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Never written after insert.
    creator_id: Mapped[int] = mapped_column(ForeignKey("users.id"))

    created_ts: Mapped[int] = mapped_column(Integer, default=unix_now)
    updated_ts: Mapped[int] = mapped_column(Integer, default=unix_now)

    filename: Mapped[str] = mapped_column(String(255))
    # Empty when the bytes live in local storage.
    external_link: Mapped[str] = mapped_column(String(2048), default="")
    type: Mapped[str] = mapped_column(String(255), default="")
    size: Mapped[int] = mapped_column(Integer, default=0)

    memo_id: Mapped[int | None] = mapped_column(
        ForeignKey("memos.id", ondelete="SET NULL"),
        nullable=True
    )

    creator: Mapped["User"] = relationship(
        "User",
        back_populates="resources",
        foreign_keys=[creator_id]
    )
    memo: Mapped["Memo"] = relationship(
        "Memo",
        back_populates="resources"
    )

    __table_args__ = (
        Index('idx_resource_creator', 'creator_id', 'created_ts'),
        Index('idx_resource_memo', 'memo_id'),
    )
