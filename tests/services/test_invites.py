import pytest

from giftlists.errors import Forbidden
from giftlists.schemas.user import ListUserIn
from giftlists.services.invites import MembershipService


@pytest.fixture
def membership(db):
    return MembershipService(db)


def test_create_list_with_members(membership, lists, identity, owner_user, member_user):
    gift_list, invitations = membership.create_list_with_members(
        owner_user,
        "Birthday",
        [
            ListUserIn(name="Member", email="member@test.com"),
            ListUserIn(name="Newcomer", email="new@test.com"),
        ],
    )

    newcomer = identity.resolve_user_by_email("new@test.com")
    assert newcomer.can_create is False
    assert [i.email for i in invitations] == ["member@test.com", "new@test.com"]
    assert invitations[1].login_token == newcomer.login_token
    assert invitations[1].list_name == "Birthday"
    assert lists.is_member(gift_list.list_uuid, owner_user.user_uuid)
    assert lists.is_member(gift_list.list_uuid, member_user.user_uuid)
    assert lists.is_member(gift_list.list_uuid, newcomer.user_uuid)


def test_create_list_requires_privilege(membership, member_user):
    with pytest.raises(Forbidden):
        membership.create_list_with_members(member_user, "Nope", [])


def test_create_list_skips_owner_email(membership, owner_user):
    _, invitations = membership.create_list_with_members(
        owner_user, "Solo", [ListUserIn(name="Owner", email="owner@test.com")]
    )

    assert invitations == []


def test_update_list_invites_only_new_members(membership, lists, birthday_list, owner_user):
    gift_list, invitations = membership.update_list(
        owner_user,
        birthday_list.list_uuid,
        "Party",
        [
            ListUserIn(name="Member", email="member@test.com"),
            ListUserIn(name="Late", email="late@test.com"),
        ],
    )

    assert lists.list_row(gift_list.list_uuid).name == "Party"
    assert [i.email for i in invitations] == ["late@test.com"]
    assert invitations[0].list_name == "Party"


def test_update_list_requires_owner(membership, birthday_list, member_user):
    with pytest.raises(Forbidden):
        membership.update_list(member_user, birthday_list.list_uuid, "Mine now", [])


def test_delete_list_requires_owner(membership, lists, birthday_list, member_user, owner_user):
    with pytest.raises(Forbidden):
        membership.delete_list(member_user, birthday_list.list_uuid)

    membership.delete_list(owner_user, birthday_list.list_uuid)
    assert lists.lists_for_user(owner_user.user_uuid) == []
