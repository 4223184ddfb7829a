from pydantic import BaseModel, Field

from giftlists.schemas.user import ListUserIn


class ListView(BaseModel):
    uuid: str
    name: str
    owner_uuid: str
    owner_name: str
    is_owner: bool = False


class GiftListCreate(BaseModel):
    name: str
    users: list[ListUserIn] = Field(default_factory=list)


class GiftListUpdate(BaseModel):
    name: str
    users: list[ListUserIn] = Field(default_factory=list)


class Invitation(BaseModel):
    name: str
    email: str
    list_name: str
    login_token: str
