"""Bulk editing of one recipient's gifts on a list.

The client sends the complete list it wants stored. Rows it has never
saved carry a ``newRow-`` placeholder (or no identifier at all), and other
rows in the same submission may point at those placeholders through
``alternate_to_uuid``. Every placeholder is mapped to a fresh identifier
before any reference is resolved, so forward references work.

A call is applied inside one savepoint: if any row fails, nothing from
that call is kept.
"""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError

from giftlists.errors import Forbidden, InvalidReference, NotFound, StoreFailure, Unauthorized
from giftlists.models.gift import Gift
from giftlists.schemas.gift import GiftSubmission, ReconcileResult
from giftlists.services.lists import ListStore
from giftlists.services.store import Store

logger = logging.getLogger("giftlists.reconcile")

PLACEHOLDER_PREFIX = "newRow-"


def is_placeholder(identifier: str) -> bool:
    return identifier.startswith(PLACEHOLDER_PREFIX)


def map_placeholders(submitted: list[GiftSubmission]) -> dict[str, str]:
    """Give every placeholder in the submission a new durable identifier."""
    mapping: dict[str, str] = {}
    for gift in submitted:
        if not is_placeholder(gift.uuid):
            continue
        if gift.uuid in mapping:
            raise InvalidReference(f"Placeholder {gift.uuid} is used more than once.")
        mapping[gift.uuid] = str(uuid.uuid4())
    return mapping


def resolve_alternate(
    alternate: str | None,
    placeholders: dict[str, str],
    allowed: set[str],
    gift_uuid: str,
) -> str | None:
    if not alternate:
        return None
    if is_placeholder(alternate):
        if alternate not in placeholders:
            raise InvalidReference(f"Unknown placeholder {alternate}.")
        resolved = placeholders[alternate]
    else:
        resolved = alternate
    if resolved == gift_uuid:
        raise InvalidReference("A gift can't be an alternate to itself.")
    if resolved not in allowed:
        raise InvalidReference()
    return resolved


class ReconciliationEngine(Store):
    def __init__(self, db):
        super().__init__(db)
        self.lists = ListStore(db)

    def reconcile(
        self, list_uuid: str, actor_uuid: str, submitted: list[GiftSubmission]
    ) -> ReconcileResult:
        self.lists.list_row(list_uuid)
        if not self.lists.is_member(list_uuid, actor_uuid):
            raise Unauthorized()

        try:
            with self.db.begin_nested():
                result = self._apply(list_uuid, actor_uuid, submitted)
        except SQLAlchemyError as exc:
            raise StoreFailure() from exc

        logger.info(
            "Reconciled list %s for %s: %d created, %d updated, %d deleted",
            list_uuid,
            actor_uuid,
            len(result.created),
            len(result.updated),
            len(result.deleted),
        )
        return result

    def _apply(
        self, list_uuid: str, actor_uuid: str, submitted: list[GiftSubmission]
    ) -> ReconcileResult:
        result = ReconcileResult()
        current: dict[str, Gift] = {
            gift.gift_uuid: gift
            for gift in self.lists.gift_rows_for_owner(list_uuid, actor_uuid)
        }

        placeholders = map_placeholders(submitted)
        final_uuids = []
        for gift in submitted:
            if is_placeholder(gift.uuid):
                final_uuids.append(placeholders[gift.uuid])
            else:
                final_uuids.append(gift.uuid or str(uuid.uuid4()))
        kept: set[str] = set()
        for gift in submitted:
            if not gift.uuid or is_placeholder(gift.uuid):
                continue
            if gift.uuid in kept:
                raise InvalidReference(f"Gift {gift.uuid} is listed more than once.")
            kept.add(gift.uuid)
        allowed = set(final_uuids)

        for gift_uuid in current:
            if gift_uuid not in kept:
                self.lists.delete_gift(gift_uuid)
                result.deleted.append(gift_uuid)

        for gift, gift_uuid in zip(submitted, final_uuids):
            alternate = resolve_alternate(
                gift.alternate_to_uuid, placeholders, allowed, gift_uuid
            )
            if not gift.uuid or is_placeholder(gift.uuid):
                self.lists.create_gift(
                    list_uuid,
                    actor_uuid,
                    url=gift.url,
                    comment=gift.comment,
                    alternate_to=alternate,
                    gift_uuid=gift_uuid,
                )
                result.created.append(gift_uuid)
                continue

            stored = self.lists.gift_row(gift.uuid)
            if stored.owner_uuid != actor_uuid:
                raise Forbidden("Can't modify a gift you don't own.")
            if stored.gift_uuid not in current:
                raise NotFound("Gift is not on this list.")
            if (stored.url, stored.comment, stored.alternate_to) == (
                gift.url,
                gift.comment,
                alternate,
            ):
                continue
            self.lists.modify_gift(
                stored.gift_uuid,
                url=gift.url,
                comment=gift.comment,
                claimed=stored.claimed,
                claimed_by=stored.claimed_by,
                alternate_to=alternate,
            )
            result.updated.append(stored.gift_uuid)

        return result
