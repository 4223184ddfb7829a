from fastapi import APIRouter

from giftlists.dependencies import CurrentUser, DbSession
from giftlists.schemas.gift import GiftView
from giftlists.services.claims import ClaimEngine

router = APIRouter(prefix="/gifts", tags=["gifts"])


@router.post("/{gift_uuid}/claim", response_model=GiftView)
def claim_gift(gift_uuid: str, user: CurrentUser, db: DbSession):
    return ClaimEngine(db).claim(gift_uuid, user.user_uuid)


@router.delete("/{gift_uuid}/claim", response_model=GiftView)
def unclaim_gift(gift_uuid: str, user: CurrentUser, db: DbSession):
    return ClaimEngine(db).unclaim(gift_uuid, user.user_uuid)
