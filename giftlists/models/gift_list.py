import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from giftlists.database import Base


class GiftList(Base):
    __tablename__ = "lists"

    list_uuid: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255))
    owner_uuid: Mapped[str] = mapped_column(ForeignKey("users.user_uuid"))
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    owner: Mapped["User"] = relationship("User", lazy="selectin")

    @property
    def owner_name(self) -> str:
        return self.owner.name
