from fastapi import APIRouter, HTTPException, status

from giftlists.dependencies import DbSession, create_access_token
from giftlists.errors import NotFound
from giftlists.schemas.auth import AccessTokenResponse
from giftlists.services.identity import IdentityStore

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login/{login_token}", response_model=AccessTokenResponse)
def login(login_token: str, db: DbSession):
    try:
        user = IdentityStore(db).resolve_user_by_token(login_token)
    except NotFound:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return AccessTokenResponse(access_token=create_access_token(user))
