from fastapi import APIRouter

from giftlists.dependencies import CurrentUser, DbSession
from giftlists.schemas.user import UserView
from giftlists.services.identity import IdentityStore

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserView)
def read_me(user: CurrentUser, db: DbSession):
    return IdentityStore(db).user_view(user.user_uuid, user.user_uuid)
