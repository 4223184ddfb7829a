"""Failure values raised by the stores and engines.

Every case is its own exception class so callers can tell them apart; the
HTTP layer maps each one to a status code through ``status_code`` and
``code``.
"""

from fastapi import status


class GiftListError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "error"
    default_message = "Request failed."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class NotFound(GiftListError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found."


class Unauthorized(GiftListError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "unauthorized"
    default_message = "You are not a member of this list."


class Forbidden(GiftListError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "You don't have permission to do that."


class SelfClaimForbidden(GiftListError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "self_claim_forbidden"
    default_message = "You can't claim or unclaim your own gifts."


class _ClaimerError(GiftListError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, claimed_by: str | None, claimed_by_name: str | None = None):
        self.claimed_by = claimed_by
        self.claimed_by_name = claimed_by_name
        super().__init__(self.default_message.format(name=claimed_by_name or "someone"))


class AlreadyClaimed(_ClaimerError):
    code = "already_claimed"
    default_message = "Gift already claimed by {name}."


class ClaimedByOther(_ClaimerError):
    code = "claimed_by_other"
    default_message = "Gift claimed by {name}."


class NotClaimed(GiftListError):
    status_code = status.HTTP_409_CONFLICT
    code = "not_claimed"
    default_message = "Gift isn't claimed."


class InvalidReference(GiftListError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_reference"
    default_message = "Alternate gift reference is not part of this list."


class StoreFailure(GiftListError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "store_failure"
    default_message = "The data store rejected the operation."
