from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from giftlists.database import Base


class ListMember(Base):
    __tablename__ = "list_members"
    __table_args__ = (
        UniqueConstraint("list_uuid", "user_uuid", name="uq_list_members_list_user"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    list_uuid: Mapped[str] = mapped_column(ForeignKey("lists.list_uuid"), index=True)
    user_uuid: Mapped[str] = mapped_column(ForeignKey("users.user_uuid"), index=True)
