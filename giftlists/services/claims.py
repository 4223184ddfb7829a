"""Claiming and releasing gifts.

A gift moves between unclaimed and claimed-by-one-member. Each transition
is a single conditional UPDATE, so two members racing for the same gift
cannot both win: the loser sees zero affected rows and gets the state the
winner left behind.
"""

import logging

from sqlalchemy import false, true, update

from giftlists.errors import (
    AlreadyClaimed,
    ClaimedByOther,
    NotClaimed,
    SelfClaimForbidden,
    Unauthorized,
)
from giftlists.models.gift import Gift
from giftlists.models.user import User
from giftlists.schemas.gift import GiftView
from giftlists.services.lists import ListStore
from giftlists.services.store import Store

logger = logging.getLogger("giftlists.claims")


class ClaimEngine(Store):
    def __init__(self, db):
        super().__init__(db)
        self.lists = ListStore(db)

    def _load(self, gift_uuid: str, actor_uuid: str) -> Gift:
        gift = self.lists.gift_row(gift_uuid)
        list_uuid = self.lists.list_of_gift(gift_uuid)
        if list_uuid is None or not self.lists.is_member(list_uuid, actor_uuid):
            raise Unauthorized()
        if gift.owner_uuid == actor_uuid:
            raise SelfClaimForbidden()
        return gift

    def _claimer_name(self, user_uuid: str | None) -> str | None:
        if user_uuid is None:
            return None
        claimer = self.db.get(User, user_uuid)
        return claimer.name if claimer is not None else None

    def _refresh(self, gift: Gift) -> Gift:
        self.db.refresh(gift)
        return gift

    def claim(self, gift_uuid: str, actor_uuid: str) -> GiftView:
        gift = self._load(gift_uuid, actor_uuid)
        if gift.claimed:
            raise AlreadyClaimed(gift.claimed_by, self._claimer_name(gift.claimed_by))

        result = self._execute(
            update(Gift)
            .where(Gift.gift_uuid == gift_uuid, Gift.claimed == false())
            .values(claimed=True, claimed_by=actor_uuid)
            .execution_options(synchronize_session=False)
        )
        gift = self._refresh(gift)
        if result.rowcount != 1:
            logger.info("Lost claim race on gift %s to %s", gift_uuid, gift.claimed_by)
            raise AlreadyClaimed(gift.claimed_by, self._claimer_name(gift.claimed_by))

        logger.info("Gift %s claimed by %s", gift_uuid, actor_uuid)
        return self.lists.get_gift(gift_uuid, actor_uuid)

    def unclaim(self, gift_uuid: str, actor_uuid: str) -> GiftView:
        gift = self._load(gift_uuid, actor_uuid)
        if not gift.claimed:
            raise NotClaimed()
        if gift.claimed_by != actor_uuid:
            raise ClaimedByOther(gift.claimed_by, self._claimer_name(gift.claimed_by))

        result = self._execute(
            update(Gift)
            .where(
                Gift.gift_uuid == gift_uuid,
                Gift.claimed == true(),
                Gift.claimed_by == actor_uuid,
            )
            .values(claimed=False, claimed_by=None)
            .execution_options(synchronize_session=False)
        )
        gift = self._refresh(gift)
        if result.rowcount != 1:
            if not gift.claimed:
                raise NotClaimed()
            raise ClaimedByOther(gift.claimed_by, self._claimer_name(gift.claimed_by))

        logger.info("Gift %s unclaimed by %s", gift_uuid, actor_uuid)
        return self.lists.get_gift(gift_uuid, actor_uuid)
