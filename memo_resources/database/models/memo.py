from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List, TYPE_CHECKING

from memo_resources.database.database import Base, unix_now

if TYPE_CHECKING:
    from memo_resources.database.models.user import User
    from memo_resources.database.models.resource import Resource


class Memo(Base):
    __tablename__ = "memos"

    id: Mapped[int] = mapped_column(primary_key=True)
    creator_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)

    content: Mapped[str] = mapped_column(Text, default="")

    created_ts: Mapped[int] = mapped_column(Integer, default=unix_now)
    updated_ts: Mapped[int] = mapped_column(Integer, default=unix_now)

    creator: Mapped["User"] = relationship(
        "User",
        back_populates="memos",
        foreign_keys=[creator_id]
    )
    resources: Mapped[List["Resource"]] = relationship(
        "Resource",
        back_populates="memo"
    )
