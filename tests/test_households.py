"""Household and membership tests."""

import pytest
from sqlalchemy.exc import OperationalError

from src.models.household import Household, HouseholdMember
from src.models.user import User
from src.services import access
from src.services.household_service import HouseholdService


def test_create_household_adds_owner_membership(client, auth_headers):
    """Test that creating a household makes the creator its only owner."""
    response = client.post("/api/v1/households", headers=auth_headers, json={"name": "Smiths"})
    assert response.status_code == 201
    household = response.json()
    assert household["name"] == "Smiths"
    assert household["owner_id"] == auth_headers.user_id

    members = client.get(
        f"/api/v1/households/{household['id']}/members", headers=auth_headers
    ).json()
    assert len(members) == 1
    assert members[0]["user_id"] == auth_headers.user_id
    assert members[0]["role"] == "owner"
    assert members[0]["email"] == auth_headers.email


def test_create_household_requires_name(client, auth_headers):
    """Test that an empty household name is rejected."""
    response = client.post("/api/v1/households", headers=auth_headers, json={"name": ""})
    assert response.status_code == 400


def test_create_household_rolls_back_on_failure(db, monkeypatch):
    """Test that a failed commit leaves no ownerless household behind."""
    user = User(email="owner@example.com", password_hash="fake")
    db.add(user)
    db.commit()

    def failing_commit():
        raise OperationalError("INSERT INTO household_members", {}, Exception("disk full"))

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(OperationalError):
        HouseholdService(db).create_household("Broken", user.id)
    monkeypatch.undo()

    assert db.query(Household).count() == 0
    assert db.query(HouseholdMember).count() == 0


def test_list_households_only_returns_memberships(client, auth_headers, other_headers, household):
    """Test that users only see households they belong to."""
    client.post("/api/v1/households", headers=other_headers, json={"name": "Joneses"})

    mine = client.get("/api/v1/households", headers=auth_headers).json()
    assert [h["name"] for h in mine] == ["Smiths"]

    theirs = client.get("/api/v1/households", headers=other_headers).json()
    assert [h["name"] for h in theirs] == ["Joneses"]


def test_get_household_forbidden_for_non_member(client, other_headers, household):
    """Test that non-members can't read a household."""
    response = client.get(f"/api/v1/households/{household['id']}", headers=other_headers)
    assert response.status_code == 403


def test_get_missing_household(client, auth_headers):
    """Test that an unknown household is a 404."""
    response = client.get("/api/v1/households/9999", headers=auth_headers)
    assert response.status_code == 404


def test_list_members_forbidden_for_non_member(client, other_headers, household):
    """Test that non-members can't list members."""
    response = client.get(f"/api/v1/households/{household['id']}/members", headers=other_headers)
    assert response.status_code == 403


def test_owner_removes_member(client, auth_headers, other_headers, household):
    """Test that the owner can remove a member."""
    client.post(
        f"/api/v1/households/{household['id']}/members",
        headers=auth_headers,
        json={"email": other_headers.email},
    )

    response = client.delete(
        f"/api/v1/households/{household['id']}/members/{other_headers.user_id}",
        headers=auth_headers,
    )
    assert response.status_code == 204

    members = client.get(
        f"/api/v1/households/{household['id']}/members", headers=auth_headers
    ).json()
    assert [m["user_id"] for m in members] == [auth_headers.user_id]


def test_member_can_leave(client, auth_headers, other_headers, household):
    """Test that a member can remove themselves."""
    client.post(
        f"/api/v1/households/{household['id']}/members",
        headers=auth_headers,
        json={"email": other_headers.email},
    )

    response = client.delete(
        f"/api/v1/households/{household['id']}/members/{other_headers.user_id}",
        headers=other_headers,
    )
    assert response.status_code == 204
    assert client.get("/api/v1/households", headers=other_headers).json() == []


def test_member_cannot_remove_others(client, auth_headers, other_headers, register_user, household):
    """Test that a plain member can't remove someone else."""
    third = register_user("third@example.com")
    for headers in (other_headers, third):
        client.post(
            f"/api/v1/households/{household['id']}/members",
            headers=auth_headers,
            json={"email": headers.email},
        )

    response = client.delete(
        f"/api/v1/households/{household['id']}/members/{third.user_id}",
        headers=other_headers,
    )
    assert response.status_code == 403


def test_cannot_remove_only_owner(client, auth_headers, household):
    """Test that the last owner can't leave the household."""
    response = client.delete(
        f"/api/v1/households/{household['id']}/members/{auth_headers.user_id}",
        headers=auth_headers,
    )
    assert response.status_code == 409


def test_remove_missing_member(client, auth_headers, other_headers, household):
    """Test that removing a non-member is a 404."""
    response = client.delete(
        f"/api/v1/households/{household['id']}/members/{other_headers.user_id}",
        headers=auth_headers,
    )
    assert response.status_code == 404


def test_access_predicates(db, client, auth_headers, other_headers, household):
    """Test the membership and ownership predicates directly."""
    household_id = household["id"]
    assert access.is_member(db, auth_headers.user_id, household_id)
    assert access.is_owner(db, auth_headers.user_id, household_id)
    assert not access.is_member(db, other_headers.user_id, household_id)
    assert not access.is_owner(db, other_headers.user_id, household_id)
    assert [h.id for h in access.member_households(db, auth_headers.user_id)] == [household_id]


def test_access_fails_closed_on_lookup_error(db, monkeypatch):
    """Test that a failing membership lookup denies access."""

    def broken_lookup(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(access, "_membership", broken_lookup)
    assert access.is_member(db, 1, 1) is False
    assert access.is_owner(db, 1, 1) is False


def test_removing_creator_moves_ownership(client, auth_headers, register_user, household):
    """Test that owner_id follows a remaining owner when the creator is removed."""
    co_owner = register_user("co@example.com")
    client.post(
        f"/api/v1/households/{household['id']}/members",
        headers=auth_headers,
        json={"email": co_owner.email, "role": "owner"},
    )

    response = client.delete(
        f"/api/v1/households/{household['id']}/members/{auth_headers.user_id}",
        headers=co_owner,
    )
    assert response.status_code == 204

    updated = client.get(f"/api/v1/households/{household['id']}", headers=co_owner).json()
    assert updated["owner_id"] == co_owner.user_id
    members = client.get(
        f"/api/v1/households/{household['id']}/members", headers=co_owner
    ).json()
    assert [(m["user_id"], m["role"]) for m in members] == [(co_owner.user_id, "owner")]
