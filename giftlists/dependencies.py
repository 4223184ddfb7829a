from datetime import datetime, timedelta, timezone
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from giftlists.config import settings
from giftlists.database import SessionLocal
from giftlists.errors import NotFound
from giftlists.models.user import User
from giftlists.notifier import InviteNotifier
from giftlists.services.identity import IdentityStore


def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


DbSession = Annotated[Session, Depends(get_db)]

security = HTTPBearer()


def create_access_token(user: User) -> str:
    payload = {
        "sub": user.user_uuid,
        "exp": datetime.now(timezone.utc)
        + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: DbSession,
) -> User:
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        return IdentityStore(db).get_user(payload["sub"])
    except (KeyError, NotFound):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_notifier() -> InviteNotifier:
    return InviteNotifier()


Notifier = Annotated[InviteNotifier, Depends(get_notifier)]

from giftlists.models.gift_list import GiftList
from giftlists.services.lists import ListStore


def get_list_for_member(
    list_uuid: str,
    user: Annotated[User, Depends(get_current_user)],
    db: DbSession,
) -> GiftList:
    lists = ListStore(db)
    gift_list = lists.list_row(list_uuid)
    if not lists.is_member(list_uuid, user.user_uuid):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return gift_list


MemberList = Annotated[GiftList, Depends(get_list_for_member)]
