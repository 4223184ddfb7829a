import logging

from giftlists.errors import Forbidden
from giftlists.models.gift_list import GiftList
from giftlists.models.user import User
from giftlists.schemas.gift_list import Invitation
from giftlists.schemas.user import ListUserIn
from giftlists.services.identity import IdentityStore
from giftlists.services.lists import ListStore
from giftlists.services.store import Store

logger = logging.getLogger("giftlists.invites")


class MembershipService(Store):
    """List lifecycle as driven by the list owner.

    Adding someone to a list creates their account on first sight of their
    email. Each added member yields an ``Invitation`` for the notifier.
    """

    def __init__(self, db):
        super().__init__(db)
        self.identity = IdentityStore(db)
        self.lists = ListStore(db)

    def _owned_list(self, actor: User, list_uuid: str) -> GiftList:
        gift_list = self.lists.list_row(list_uuid)
        if gift_list.owner_uuid != actor.user_uuid:
            raise Forbidden("Only the list owner can do that.")
        return gift_list

    def invite(self, gift_list: GiftList, list_user: ListUserIn) -> Invitation | None:
        user, created = self.identity.get_or_create_user(list_user.email, list_user.name)
        if not created and self.lists.is_member(gift_list.list_uuid, user.user_uuid):
            return None
        self.lists.add_member(gift_list.list_uuid, user.user_uuid)
        logger.info(
            "Added %s user %s to list %s",
            "new" if created else "existing",
            user.user_uuid,
            gift_list.list_uuid,
        )
        return Invitation(
            name=user.name,
            email=user.email,
            list_name=gift_list.name,
            login_token=self.identity.token_for_user(user.user_uuid),
        )

    def _invite_all(
        self, gift_list: GiftList, users: list[ListUserIn]
    ) -> list[Invitation]:
        invitations = []
        for list_user in users:
            invitation = self.invite(gift_list, list_user)
            if invitation is not None:
                invitations.append(invitation)
        return invitations

    def create_list_with_members(
        self, actor: User, name: str, users: list[ListUserIn]
    ) -> tuple[GiftList, list[Invitation]]:
        if not actor.can_create:
            raise Forbidden("You don't have permission to create lists.")
        gift_list = self.lists.create_list(name, actor.user_uuid)
        return gift_list, self._invite_all(gift_list, users)

    def update_list(
        self, actor: User, list_uuid: str, name: str, users: list[ListUserIn]
    ) -> tuple[GiftList, list[Invitation]]:
        gift_list = self._owned_list(actor, list_uuid)
        self.lists.modify_list(list_uuid, name)
        # TODO: drop members whose email is missing from the submitted users
        return gift_list, self._invite_all(gift_list, users)

    def delete_list(self, actor: User, list_uuid: str) -> None:
        self._owned_list(actor, list_uuid)
        self.lists.delete_list(list_uuid)
