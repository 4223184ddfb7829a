from giftlists.models.user import User
from giftlists.models.gift_list import GiftList
from giftlists.models.list_member import ListMember
from giftlists.models.gift import Gift
from giftlists.models.list_gift import ListGift

__all__ = ["User", "GiftList", "ListMember", "Gift", "ListGift"]
