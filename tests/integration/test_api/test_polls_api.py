"""Integration tests for poll and membership endpoints."""
import pytest


def _create_schedule_poll(client, headers, name="Team sync", days=("Mon", "Wed")):
    response = client.post(
        "/api/v1/polls/schedule",
        json={"name": name, "description": "Pick your free slots", "days": list(days)},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.integration
class TestCreatePolls:
    """Test poll creation endpoints."""

    def test_create_schedule_poll(self, client, owner):
        owner_id, headers = owner
        poll = _create_schedule_poll(client, headers, days=["wed", "Mon"])

        assert poll["kind"] == "schedule"
        assert poll["days"] == ["Mon", "Wed"]
        assert poll["status"] == "Open"
        assert poll["owner_id"] == owner_id
        assert poll["is_owner"] is True

    def test_schedule_poll_without_days(self, client, owner):
        _, headers = owner
        response = client.post(
            "/api/v1/polls/schedule",
            json={"name": "Team sync", "days": []},
            headers=headers,
        )
        assert response.status_code == 422

    def test_schedule_poll_with_unknown_day(self, client, owner):
        _, headers = owner
        response = client.post(
            "/api/v1/polls/schedule",
            json={"name": "Team sync", "days": ["Mon", "Someday"]},
            headers=headers,
        )
        assert response.status_code == 422

    def test_create_calendar_poll(self, client, owner):
        _, headers = owner
        response = client.post(
            "/api/v1/polls/calendar",
            json={"name": "Offsite", "start_date": "2025-03-01", "end_date": "2025-03-07"},
            headers=headers,
        )
        assert response.status_code == 201
        poll = response.json()
        assert poll["kind"] == "calendar"
        assert poll["start_date"] == "2025-03-01"
        assert poll["days"] is None

    def test_calendar_poll_inverted_range(self, client, owner):
        _, headers = owner
        response = client.post(
            "/api/v1/polls/calendar",
            json={"name": "Offsite", "start_date": "2025-03-07", "end_date": "2025-03-01"},
            headers=headers,
        )
        assert response.status_code == 422

    def test_html_stripped_from_name(self, client, owner):
        _, headers = owner
        poll = _create_schedule_poll(client, headers, name="<b>Team</b> sync")
        assert poll["name"] == "Team sync"

    def test_create_requires_session(self, client):
        response = client.post("/api/v1/polls/schedule", json={"name": "Team sync", "days": ["Mon"]})
        assert response.status_code == 401


@pytest.mark.integration
class TestListAndView:
    """Test listing and viewing polls."""

    def test_list_owned_and_shared(self, client, owner, guest):
        _, owner_headers = owner
        _, guest_headers = guest
        shared = _create_schedule_poll(client, owner_headers, name="beta")
        _create_schedule_poll(client, owner_headers, name="Private")
        own = _create_schedule_poll(client, guest_headers, name="Alpha")

        response = client.post(
            f"/api/v1/polls/{shared['id']}/members",
            json={"email": "guest@example.com"},
            headers=owner_headers,
        )
        assert response.status_code == 201

        polls = client.get("/api/v1/polls", headers=guest_headers).json()
        assert [p["id"] for p in polls] == [own["id"], shared["id"]]
        assert [p["is_owner"] for p in polls] == [True, False]

    def test_view_requires_invitation(self, client, owner, stranger):
        _, owner_headers = owner
        _, stranger_headers = stranger
        poll = _create_schedule_poll(client, owner_headers)

        response = client.get(f"/api/v1/polls/{poll['id']}", headers=stranger_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "You have not been invited to this poll"

    def test_view_missing_poll(self, client, owner):
        _, headers = owner
        response = client.get("/api/v1/polls/does-not-exist", headers=headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Poll not found"

    def test_view_requires_session(self, client, owner):
        _, headers = owner
        poll = _create_schedule_poll(client, headers)
        response = client.get(f"/api/v1/polls/{poll['id']}")
        assert response.status_code == 401

    def test_schedule_detail_lists_full_grid(self, client, owner):
        _, headers = owner
        poll = _create_schedule_poll(client, headers)

        detail = client.get(f"/api/v1/polls/{poll['id']}", headers=headers).json()

        assert detail["poll"]["id"] == poll["id"]
        assert len(detail["slots"]) == 44
        assert detail["slots"][0] == {
            "slot": "Mon-07:00:00", "count": 0, "voted": False, "rank": 0, "voters": [],
        }
        assert detail["slots"][-1]["slot"] == "Wed-17:30:00"


@pytest.mark.integration
class TestOwnerActions:
    """Test status changes, deletion and membership management."""

    def test_update_status(self, client, owner):
        _, headers = owner
        poll = _create_schedule_poll(client, headers)

        response = client.patch(
            f"/api/v1/polls/{poll['id']}/status", json={"status": "Closed"}, headers=headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Closed"

    def test_update_status_invalid(self, client, owner):
        _, headers = owner
        poll = _create_schedule_poll(client, headers)

        response = client.patch(
            f"/api/v1/polls/{poll['id']}/status", json={"status": "Archived"}, headers=headers
        )
        assert response.status_code == 422

    def test_update_status_not_owner(self, client, owner, guest):
        _, owner_headers = owner
        _, guest_headers = guest
        poll = _create_schedule_poll(client, owner_headers)

        response = client.patch(
            f"/api/v1/polls/{poll['id']}/status", json={"status": "Cancelled"}, headers=guest_headers
        )
        assert response.status_code == 403

    def test_delete_poll(self, client, owner):
        _, headers = owner
        poll = _create_schedule_poll(client, headers)
        client.post(f"/api/v1/polls/{poll['id']}/votes", json={"slot": "Mon-07:00:00"}, headers=headers)

        response = client.delete(f"/api/v1/polls/{poll['id']}", headers=headers)
        assert response.status_code == 200

        assert client.get(f"/api/v1/polls/{poll['id']}", headers=headers).status_code == 404

    def test_delete_poll_not_owner(self, client, owner, guest):
        _, owner_headers = owner
        _, guest_headers = guest
        poll = _create_schedule_poll(client, owner_headers)

        response = client.delete(f"/api/v1/polls/{poll['id']}", headers=guest_headers)
        assert response.status_code == 403

    def test_member_lifecycle(self, client, owner, guest):
        _, owner_headers = owner
        guest_id, guest_headers = guest
        poll = _create_schedule_poll(client, owner_headers)
        members_url = f"/api/v1/polls/{poll['id']}/members"

        response = client.post(members_url, json={"email": "GUEST@example.com"}, headers=owner_headers)
        assert response.status_code == 201
        member = response.json()
        assert member["user_id"] == guest_id
        assert member["email"] == "guest@example.com"

        response = client.post(members_url, json={"email": "guest@example.com"}, headers=owner_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "User is already a member of this poll"

        members = client.get(members_url, headers=guest_headers).json()
        assert members == [member]

        response = client.delete(f"{members_url}/{member['id']}", headers=owner_headers)
        assert response.status_code == 200
        assert client.get(f"/api/v1/polls/{poll['id']}", headers=guest_headers).status_code == 403

    def test_add_unknown_member(self, client, owner):
        _, headers = owner
        poll = _create_schedule_poll(client, headers)

        response = client.post(
            f"/api/v1/polls/{poll['id']}/members", json={"email": "ghost@example.com"}, headers=headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "No user with this email"

    def test_remove_unknown_member(self, client, owner):
        _, headers = owner
        poll = _create_schedule_poll(client, headers)

        response = client.delete(f"/api/v1/polls/{poll['id']}/members/999", headers=headers)
        assert response.status_code == 404

    def test_only_owner_invites(self, client, owner, guest):
        _, owner_headers = owner
        _, guest_headers = guest
        poll = _create_schedule_poll(client, owner_headers)

        response = client.post(
            f"/api/v1/polls/{poll['id']}/members", json={"email": "guest@example.com"}, headers=guest_headers
        )
        assert response.status_code == 403
