from pydantic import BaseModel


class UserView(BaseModel):
    uuid: str
    email: str
    name: str
    can_create: bool
    is_me: bool = False


class ClaimerView(BaseModel):
    uuid: str
    name: str
    is_me: bool = False


class ListUserIn(BaseModel):
    name: str
    email: str
