from sqlalchemy import ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from giftlists.database import Base


class ListGift(Base):
    __tablename__ = "list_gifts"
    __table_args__ = (Index("ix_list_gifts_list_owner", "list_uuid", "owner_uuid"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    list_uuid: Mapped[str] = mapped_column(ForeignKey("lists.list_uuid"))
    owner_uuid: Mapped[str] = mapped_column(ForeignKey("users.user_uuid"))
    gift_uuid: Mapped[str] = mapped_column(ForeignKey("gifts.gift_uuid"), unique=True)
