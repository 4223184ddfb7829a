import uuid
from datetime import datetime

from sqlalchemy import String, Boolean, func
from sqlalchemy.orm import Mapped, mapped_column

from giftlists.database import Base


class User(Base):
    __tablename__ = "users"

    user_uuid: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    login_token: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    can_create: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
