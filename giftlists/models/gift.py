import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from giftlists.database import Base


class Gift(Base):
    __tablename__ = "gifts"

    gift_uuid: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    owner_uuid: Mapped[str] = mapped_column(ForeignKey("users.user_uuid"), index=True)
    url: Mapped[str] = mapped_column(String(2048), default="")
    comment: Mapped[str] = mapped_column(Text, default="")
    claimed: Mapped[bool] = mapped_column(Boolean, default=False)
    claimed_by: Mapped[str | None] = mapped_column(
        ForeignKey("users.user_uuid"), default=None
    )
    # Same-owner reference, checked by the reconciliation engine.
    alternate_to: Mapped[str | None] = mapped_column(String(36), default=None)
