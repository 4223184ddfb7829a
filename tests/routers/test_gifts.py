def gifts_url(gift_list, user):
    return f"/lists/{gift_list.list_uuid}/members/{user.user_uuid}/gifts"


def test_reconcile_gifts(client, member_user, member_headers, birthday_list):
    response = client.put(
        f"/lists/{birthday_list.list_uuid}/gifts",
        headers=member_headers,
        json={
            "gifts": [
                {"uuid": "newRow-1", "url": "http://a", "comment": "A", "alternate_to_uuid": "newRow-2"},
                {"uuid": "newRow-2", "url": "http://b", "comment": "B", "alternate_to_uuid": ""},
            ]
        },
    )
    assert response.status_code == 200
    assert len(response.json()["created"]) == 2

    gifts = client.get(gifts_url(birthday_list, member_user), headers=member_headers).json()
    by_comment = {g["comment"]: g for g in gifts}
    assert by_comment["A"]["alternate_to_uuid"] == by_comment["B"]["uuid"]


def test_reconcile_gifts_non_member(client, outsider_headers, birthday_list):
    response = client.put(
        f"/lists/{birthday_list.list_uuid}/gifts",
        headers=outsider_headers,
        json={"gifts": [{"url": "http://x", "comment": "sneaky"}]},
    )
    assert response.status_code == 403
    assert response.json()["error"] == "unauthorized"


def test_reconcile_bad_reference(client, member_headers, birthday_list):
    response = client.put(
        f"/lists/{birthday_list.list_uuid}/gifts",
        headers=member_headers,
        json={"gifts": [{"uuid": "newRow-1", "alternate_to_uuid": "newRow-7"}]},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_reference"


def test_owner_view_hides_claims(client, member_user, member_headers, other_headers, birthday_list, member_gift):
    client.post(f"/gifts/{member_gift.gift_uuid}/claim", headers=other_headers)

    response = client.get(gifts_url(birthday_list, member_user), headers=member_headers)
    assert response.status_code == 200
    gift_data = response.json()[0]
    assert "claimed" not in gift_data
    assert "claimed_by" not in gift_data


def test_member_view_shows_claims(client, member_user, other_user, other_headers, birthday_list, member_gift):
    client.post(f"/gifts/{member_gift.gift_uuid}/claim", headers=other_headers)

    response = client.get(gifts_url(birthday_list, member_user), headers=other_headers)
    gift_data = response.json()[0]
    assert gift_data["claimed"] is True
    assert gift_data["claimed_by"]["uuid"] == other_user.user_uuid
    assert gift_data["claimed_by"]["is_me"] is True


def test_member_gifts_forbidden_for_outsider(client, member_user, outsider_headers, birthday_list):
    response = client.get(gifts_url(birthday_list, member_user), headers=outsider_headers)
    assert response.status_code == 403


def test_claim_gift(client, other_user, other_headers, member_gift):
    response = client.post(f"/gifts/{member_gift.gift_uuid}/claim", headers=other_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["claimed"] is True
    assert data["claimed_by"]["uuid"] == other_user.user_uuid


def test_claim_gift_already_claimed(client, other_user, other_headers, owner_headers, member_gift):
    client.post(f"/gifts/{member_gift.gift_uuid}/claim", headers=other_headers)

    response = client.post(f"/gifts/{member_gift.gift_uuid}/claim", headers=owner_headers)
    assert response.status_code == 409
    assert response.json()["error"] == "already_claimed"
    assert response.json()["claimed_by"] == other_user.user_uuid


def test_claim_own_gift(client, member_headers, member_gift):
    response = client.post(f"/gifts/{member_gift.gift_uuid}/claim", headers=member_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "self_claim_forbidden"


def test_claim_gift_not_found(client, other_headers):
    response = client.post("/gifts/missing/claim", headers=other_headers)
    assert response.status_code == 404


def test_unclaim_gift(client, other_headers, member_gift):
    client.post(f"/gifts/{member_gift.gift_uuid}/claim", headers=other_headers)

    response = client.delete(f"/gifts/{member_gift.gift_uuid}/claim", headers=other_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["claimed"] is False
    assert data["claimed_by"] is None


def test_unclaim_gift_not_claimed(client, other_headers, member_gift):
    response = client.delete(f"/gifts/{member_gift.gift_uuid}/claim", headers=other_headers)
    assert response.status_code == 409
    assert response.json()["error"] == "not_claimed"


def test_unclaim_gift_by_other_user(client, other_headers, owner_headers, member_gift):
    client.post(f"/gifts/{member_gift.gift_uuid}/claim", headers=other_headers)

    response = client.delete(f"/gifts/{member_gift.gift_uuid}/claim", headers=owner_headers)
    assert response.status_code == 409
    assert response.json()["error"] == "claimed_by_other"


def test_reconcile_gifts_null_alternate(client, member_headers, birthday_list):
    response = client.put(
        f"/lists/{birthday_list.list_uuid}/gifts",
        headers=member_headers,
        json={"gifts": [{"uuid": "newRow-1", "url": "http://a", "comment": "A", "alternate_to_uuid": None}]},
    )
    assert response.status_code == 200
    assert len(response.json()["created"]) == 1


def test_reconcile_gifts_duplicate_identifier(client, lists, member_user, member_headers, birthday_list):
    gift = lists.create_gift(birthday_list.list_uuid, member_user.user_uuid, "http://a", "A")

    response = client.put(
        f"/lists/{birthday_list.list_uuid}/gifts",
        headers=member_headers,
        json={"gifts": [{"uuid": gift.gift_uuid, "comment": "one"}, {"uuid": gift.gift_uuid, "comment": "two"}]},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_reference"
