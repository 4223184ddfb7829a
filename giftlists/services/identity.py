import logging
import secrets
import uuid

from sqlalchemy import delete, select, update

from giftlists.errors import NotFound
from giftlists.models.gift import Gift
from giftlists.models.gift_list import GiftList
from giftlists.models.list_gift import ListGift
from giftlists.models.list_member import ListMember
from giftlists.models.user import User
from giftlists.schemas.user import UserView
from giftlists.services.lists import ListStore
from giftlists.services.store import Store

logger = logging.getLogger("giftlists.identity")

LOGIN_TOKEN_BYTES = 32


def generate_login_token() -> str:
    return secrets.token_urlsafe(LOGIN_TOKEN_BYTES)


class IdentityStore(Store):
    def resolve_user_by_token(self, token: str) -> User:
        user = self.db.execute(
            select(User).where(User.login_token == token)
        ).scalar_one_or_none()
        if user is None:
            raise NotFound("Unknown login token.")
        return user

    def resolve_user_by_email(self, email: str) -> User:
        user = self.db.execute(
            select(User).where(User.email == email)
        ).scalar_one_or_none()
        if user is None:
            raise NotFound("No user with that email.")
        return user

    def get_user(self, user_uuid: str) -> User:
        user = self.db.get(User, user_uuid)
        if user is None:
            raise NotFound("User not found.")
        return user

    def user_view(self, user_uuid: str, viewer_uuid: str) -> UserView:
        user = self.get_user(user_uuid)
        return UserView(
            uuid=user.user_uuid,
            email=user.email,
            name=user.name,
            can_create=user.can_create,
            is_me=user.user_uuid == viewer_uuid,
        )

    def token_for_user(self, user_uuid: str) -> str:
        return self.get_user(user_uuid).login_token

    def create_user(
        self, email: str, name: str, can_create: bool = False
    ) -> tuple[User, str]:
        token = generate_login_token()
        user = User(
            user_uuid=str(uuid.uuid4()),
            login_token=token,
            email=email,
            name=name,
            can_create=can_create,
        )
        self.db.add(user)
        self._flush()
        logger.info("Created user %s", user.user_uuid)
        return user, token

    def get_or_create_user(self, email: str, name: str) -> tuple[User, bool]:
        try:
            return self.resolve_user_by_email(email), False
        except NotFound:
            user, _ = self.create_user(email, name)
            return user, True

    def modify_user(
        self,
        user_uuid: str,
        name: str | None = None,
        email: str | None = None,
        can_create: bool | None = None,
    ) -> User:
        user = self.get_user(user_uuid)
        if name is not None:
            user.name = name
        if email is not None:
            user.email = email
        if can_create is not None:
            user.can_create = can_create
        self._flush()
        return user

    def delete_user(self, user_uuid: str) -> None:
        """Remove a user and everything that hangs off them.

        Lists the user owns go with their full cascade, the user's gifts on
        other lists are removed, and claims they hold are released.
        """
        self.get_user(user_uuid)
        lists = ListStore(self.db)
        owned = self.db.execute(
            select(GiftList.list_uuid).where(GiftList.owner_uuid == user_uuid)
        ).scalars().all()
        for list_uuid in owned:
            lists.delete_list(list_uuid)

        self._execute(
            update(Gift)
            .where(Gift.claimed_by == user_uuid)
            .values(claimed=False, claimed_by=None)
        )
        self._execute(delete(ListGift).where(ListGift.owner_uuid == user_uuid))
        self._execute(delete(Gift).where(Gift.owner_uuid == user_uuid))
        self._execute(delete(ListMember).where(ListMember.user_uuid == user_uuid))
        self._execute(delete(User).where(User.user_uuid == user_uuid))
        logger.info("Deleted user %s and %d owned lists", user_uuid, len(owned))
