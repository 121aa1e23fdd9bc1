from sqlalchemy import String, Boolean, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List, TYPE_CHECKING

from memo_resources.database.database import Base, unix_now

if TYPE_CHECKING:
    from memo_resources.database.models.memo import Memo
    from memo_resources.database.models.resource import Resource


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    nickname: Mapped[str] = mapped_column(String(255), default="")
    password_hash: Mapped[str] = mapped_column(String(255))

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_ts: Mapped[int] = mapped_column(Integer, default=unix_now)
    updated_ts: Mapped[int] = mapped_column(
        Integer,
        default=unix_now,
        onupdate=unix_now
    )

    memos: Mapped[List["Memo"]] = relationship(
        "Memo",
        back_populates="creator",
        foreign_keys="Memo.creator_id"
    )
    resources: Mapped[List["Resource"]] = relationship(
        "Resource",
        back_populates="creator",
        foreign_keys="Resource.creator_id"
    )
