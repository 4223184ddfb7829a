"""List, membership and gift storage.

Reads take the viewing user's identifier so the returned views can say
whether a record is the viewer's own. Writes are plain row operations;
deciding between create, update and delete is left to the callers.
"""

import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.orm import aliased

from giftlists.errors import NotFound
from giftlists.models.gift import Gift
from giftlists.models.gift_list import GiftList
from giftlists.models.list_gift import ListGift
from giftlists.models.list_member import ListMember
from giftlists.models.user import User
from giftlists.schemas.gift import GiftView
from giftlists.schemas.gift_list import ListView
from giftlists.schemas.user import ClaimerView, UserView
from giftlists.services.store import Store

logger = logging.getLogger("giftlists.lists")


def _list_view(gift_list: GiftList, viewer_uuid: str) -> ListView:
    return ListView(
        uuid=gift_list.list_uuid,
        name=gift_list.name,
        owner_uuid=gift_list.owner_uuid,
        owner_name=gift_list.owner_name,
        is_owner=gift_list.owner_uuid == viewer_uuid,
    )


def _gift_view(gift: Gift, claimer: User | None, viewer_uuid: str) -> GiftView:
    claimed_by = None
    if claimer is not None:
        claimed_by = ClaimerView(
            uuid=claimer.user_uuid,
            name=claimer.name,
            is_me=claimer.user_uuid == viewer_uuid,
        )
    return GiftView(
        uuid=gift.gift_uuid,
        owner_uuid=gift.owner_uuid,
        url=gift.url,
        comment=gift.comment,
        claimed=gift.claimed,
        claimed_by=claimed_by,
        alternate_to_uuid=gift.alternate_to,
    )


class ListStore(Store):
    # Reads

    def lists_for_user(self, user_uuid: str) -> list[ListView]:
        query = (
            select(GiftList)
            .join(ListMember, ListMember.list_uuid == GiftList.list_uuid)
            .where(ListMember.user_uuid == user_uuid)
            .order_by(GiftList.name)
        )
        lists = self.db.execute(query).scalars().all()
        return [_list_view(gift_list, user_uuid) for gift_list in lists]

    def list_row(self, list_uuid: str) -> GiftList:
        gift_list = self.db.get(GiftList, list_uuid)
        if gift_list is None:
            raise NotFound("List not found.")
        return gift_list

    def get_list(self, list_uuid: str, viewer_uuid: str) -> ListView:
        return _list_view(self.list_row(list_uuid), viewer_uuid)

    def members(self, list_uuid: str, viewer_uuid: str) -> list[UserView]:
        query = (
            select(User)
            .join(ListMember, ListMember.user_uuid == User.user_uuid)
            .where(ListMember.list_uuid == list_uuid)
            .order_by(ListMember.id)
        )
        return [
            UserView(
                uuid=user.user_uuid,
                email=user.email,
                name=user.name,
                can_create=user.can_create,
                is_me=user.user_uuid == viewer_uuid,
            )
            for user in self.db.execute(query).scalars().all()
        ]

    def is_member(self, list_uuid: str, user_uuid: str) -> bool:
        membership = self.db.execute(
            select(ListMember.id).where(
                ListMember.list_uuid == list_uuid,
                ListMember.user_uuid == user_uuid,
            )
        ).first()
        return membership is not None

    def gift_rows_for_owner(self, list_uuid: str, owner_uuid: str) -> list[Gift]:
        query = (
            select(Gift)
            .join(ListGift, ListGift.gift_uuid == Gift.gift_uuid)
            .where(ListGift.list_uuid == list_uuid, ListGift.owner_uuid == owner_uuid)
            .order_by(ListGift.id)
        )
        return list(self.db.execute(query).scalars().all())

    def gifts_for_owner(
        self, list_uuid: str, owner_uuid: str, viewer_uuid: str
    ) -> list[GiftView]:
        claimer = aliased(User)
        query = (
            select(Gift, claimer)
            .join(ListGift, ListGift.gift_uuid == Gift.gift_uuid)
            .outerjoin(claimer, claimer.user_uuid == Gift.claimed_by)
            .where(ListGift.list_uuid == list_uuid, ListGift.owner_uuid == owner_uuid)
            .order_by(ListGift.id)
        )
        return [
            _gift_view(gift, claimed_by, viewer_uuid)
            for gift, claimed_by in self.db.execute(query).all()
        ]

    def gift_row(self, gift_uuid: str) -> Gift:
        gift = self.db.get(Gift, gift_uuid)
        if gift is None:
            raise NotFound("Gift not found.")
        return gift

    def get_gift(self, gift_uuid: str, viewer_uuid: str) -> GiftView:
        gift = self.gift_row(gift_uuid)
        claimer = self.db.get(User, gift.claimed_by) if gift.claimed_by else None
        return _gift_view(gift, claimer, viewer_uuid)

    def list_of_gift(self, gift_uuid: str) -> str | None:
        return self.db.execute(
            select(ListGift.list_uuid).where(ListGift.gift_uuid == gift_uuid)
        ).scalar_one_or_none()

    # Writes

    def create_list(self, name: str, owner_uuid: str) -> GiftList:
        gift_list = GiftList(
            list_uuid=str(uuid.uuid4()), name=name, owner_uuid=owner_uuid
        )
        self.db.add(gift_list)
        self._flush()
        self.db.add(ListMember(list_uuid=gift_list.list_uuid, user_uuid=owner_uuid))
        self._flush()
        logger.info("Created list %s for owner %s", gift_list.list_uuid, owner_uuid)
        return gift_list

    def modify_list(self, list_uuid: str, name: str) -> GiftList:
        gift_list = self.list_row(list_uuid)
        gift_list.name = name
        self._flush()
        return gift_list

    def delete_list(self, list_uuid: str) -> None:
        gift_uuids = select(ListGift.gift_uuid).where(ListGift.list_uuid == list_uuid)
        gifts = list(self.db.execute(gift_uuids).scalars().all())
        self._execute(delete(ListGift).where(ListGift.list_uuid == list_uuid))
        if gifts:
            self._execute(delete(Gift).where(Gift.gift_uuid.in_(gifts)))
        self._execute(delete(ListMember).where(ListMember.list_uuid == list_uuid))
        self._execute(delete(GiftList).where(GiftList.list_uuid == list_uuid))
        logger.info("Deleted list %s with %d gifts", list_uuid, len(gifts))

    def add_member(self, list_uuid: str, user_uuid: str) -> ListMember:
        membership = ListMember(list_uuid=list_uuid, user_uuid=user_uuid)
        self.db.add(membership)
        self._flush()
        return membership

    def create_gift(
        self,
        list_uuid: str,
        owner_uuid: str,
        url: str,
        comment: str,
        alternate_to: str | None = None,
        gift_uuid: str | None = None,
    ) -> Gift:
        gift = Gift(
            gift_uuid=gift_uuid or str(uuid.uuid4()),
            owner_uuid=owner_uuid,
            url=url,
            comment=comment,
            claimed=False,
            claimed_by=None,
            alternate_to=alternate_to,
        )
        self.db.add(gift)
        self._flush()
        self.db.add(
            ListGift(list_uuid=list_uuid, owner_uuid=owner_uuid, gift_uuid=gift.gift_uuid)
        )
        self._flush()
        return gift

    def modify_gift(
        self,
        gift_uuid: str,
        url: str,
        comment: str,
        claimed: bool,
        claimed_by: str | None,
        alternate_to: str | None = None,
    ) -> Gift:
        gift = self.gift_row(gift_uuid)
        gift.url = url
        gift.comment = comment
        gift.claimed = claimed
        gift.claimed_by = claimed_by if claimed else None
        gift.alternate_to = alternate_to
        self._flush()
        return gift

    def delete_gift(self, gift_uuid: str) -> None:
        self._execute(delete(ListGift).where(ListGift.gift_uuid == gift_uuid))
        self._execute(delete(Gift).where(Gift.gift_uuid == gift_uuid))
