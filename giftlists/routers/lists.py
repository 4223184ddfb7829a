from fastapi import APIRouter, BackgroundTasks, status

from giftlists.dependencies import CurrentUser, DbSession, MemberList, Notifier
from giftlists.schemas.gift import (
    GiftListSubmission,
    GiftOwnerView,
    GiftView,
    ReconcileResult,
)
from giftlists.schemas.gift_list import GiftListCreate, GiftListUpdate, ListView
from giftlists.schemas.user import UserView
from giftlists.services.invites import MembershipService
from giftlists.services.lists import ListStore
from giftlists.services.reconcile import ReconciliationEngine

router = APIRouter(prefix="/lists", tags=["lists"])


@router.get("", response_model=list[ListView])
def list_lists(user: CurrentUser, db: DbSession):
    return ListStore(db).lists_for_user(user.user_uuid)


@router.post("", response_model=ListView, status_code=status.HTTP_201_CREATED)
def create_list(
    request: GiftListCreate,
    user: CurrentUser,
    db: DbSession,
    notifier: Notifier,
    background_tasks: BackgroundTasks,
):
    gift_list, invitations = MembershipService(db).create_list_with_members(
        user, request.name, request.users
    )
    for invitation in invitations:
        background_tasks.add_task(notifier.send_invite, invitation)
    return ListStore(db).get_list(gift_list.list_uuid, user.user_uuid)


@router.get("/{list_uuid}", response_model=ListView)
def get_list(gift_list: MemberList, user: CurrentUser, db: DbSession):
    return ListStore(db).get_list(gift_list.list_uuid, user.user_uuid)


@router.put("/{list_uuid}", response_model=ListView)
def update_list(
    list_uuid: str,
    request: GiftListUpdate,
    user: CurrentUser,
    db: DbSession,
    notifier: Notifier,
    background_tasks: BackgroundTasks,
):
    gift_list, invitations = MembershipService(db).update_list(
        user, list_uuid, request.name, request.users
    )
    for invitation in invitations:
        background_tasks.add_task(notifier.send_invite, invitation)
    return ListStore(db).get_list(gift_list.list_uuid, user.user_uuid)


@router.delete("/{list_uuid}", status_code=status.HTTP_204_NO_CONTENT)
def delete_list(list_uuid: str, user: CurrentUser, db: DbSession):
    MembershipService(db).delete_list(user, list_uuid)


@router.get("/{list_uuid}/members", response_model=list[UserView])
def list_members(gift_list: MemberList, user: CurrentUser, db: DbSession):
    return ListStore(db).members(gift_list.list_uuid, user.user_uuid)


@router.get("/{list_uuid}/members/{owner_uuid}/gifts")
def list_member_gifts(
    owner_uuid: str, gift_list: MemberList, user: CurrentUser, db: DbSession
):
    gifts = ListStore(db).gifts_for_owner(
        gift_list.list_uuid, owner_uuid, user.user_uuid
    )
    if owner_uuid == user.user_uuid:
        return [GiftOwnerView.model_validate(gift.model_dump()) for gift in gifts]
    return [GiftView.model_validate(gift) for gift in gifts]


@router.put("/{list_uuid}/gifts", response_model=ReconcileResult)
def reconcile_gifts(
    list_uuid: str, request: GiftListSubmission, user: CurrentUser, db: DbSession
):
    return ReconciliationEngine(db).reconcile(list_uuid, user.user_uuid, request.gifts)
