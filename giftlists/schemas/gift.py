from pydantic import BaseModel, Field

from giftlists.schemas.user import ClaimerView


class GiftView(BaseModel):
    uuid: str
    owner_uuid: str
    url: str
    comment: str
    claimed: bool
    claimed_by: ClaimerView | None = None
    alternate_to_uuid: str | None = None


class GiftOwnerView(BaseModel):
    """A recipient's view of their own gift, without claim state."""

    uuid: str
    url: str
    comment: str
    alternate_to_uuid: str | None = None

    model_config = {"from_attributes": True}


class GiftSubmission(BaseModel):
    """One row of a recipient's full gift list as sent by the client.

    ``uuid`` is a durable identifier, a ``newRow-`` placeholder or empty.
    ``alternate_to_uuid`` follows the same rules.
    """

    uuid: str = ""
    url: str = ""
    comment: str = ""
    alternate_to_uuid: str | None = ""


class GiftListSubmission(BaseModel):
    gifts: list[GiftSubmission] = Field(default_factory=list)


class ReconcileResult(BaseModel):
    created: list[str] = Field(default_factory=list)
    updated: list[str] = Field(default_factory=list)
    deleted: list[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.created or self.updated or self.deleted)
