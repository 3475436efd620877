"""
Integration tests for the CRUD resources: clients, packages, instructors,
memberships, payments and training sessions.
"""

import pytest

from tests.factories.data_factories import (
    seed_client,
    seed_instructor,
    seed_membership,
    seed_package,
)

CLIENT_BODY = {
    "fname": "Deniz",
    "lname": "Kaya",
    "dob": "1990-01-15",
    "isMale": True,
    "phoneNumber": "5551234567",
    "socialNumber": "10000000001",
    "weight": 80.5,
}


@pytest.mark.api
class TestClientRoutes:
    def test_create_then_fetch(self, client, auth_headers):
        created = client.post("/api/clients", json=CLIENT_BODY, headers=auth_headers)

        assert created.status_code == 201
        body = created.get_json()
        assert isinstance(body["id"], str)
        assert body["dob"] == "1990-01-15"
        assert body["createdAt"].endswith("Z")

        fetched = client.get(f"/api/clients/{body['id']}", headers=auth_headers)
        detail = fetched.get_json()
        assert fetched.status_code == 200
        assert detail["fname"] == "Deniz"
        assert detail["memberships"] == []
        assert detail["payments"] == []
        assert detail["gymSessions"] == []

    def test_create_reports_every_missing_field(self, client, auth_headers):
        response = client.post("/api/clients", json={"fname": "X"}, headers=auth_headers)

        body = response.get_json()
        assert response.status_code == 400
        assert body["message"] == "Validation failed"
        assert {e["field"] for e in body["errors"]} == {
            "dob",
            "isMale",
            "phoneNumber",
            "socialNumber",
        }

    def test_partial_update_keeps_other_fields(self, client, auth_headers, db_session):
        existing = seed_client(db_session)

        response = client.put(
            f"/api/clients/{existing.id}", json={"locker": 12}, headers=auth_headers
        )

        body = response.get_json()
        assert response.status_code == 200
        assert body["locker"] == 12
        assert body["fname"] == existing.fname

    def test_list_is_newest_first(self, client, auth_headers, db_session):
        older = seed_client(db_session, fname="Older")
        newer = seed_client(db_session, fname="Newer", social_number="2")

        listed = client.get("/api/clients", headers=auth_headers).get_json()

        assert [c["id"] for c in listed] == [str(newer.id), str(older.id)]

    def test_delete_unreferenced_client(self, client, auth_headers, db_session):
        existing = seed_client(db_session)

        response = client.delete(f"/api/clients/{existing.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json() == {"message": "Client deleted successfully"}
        assert (
            client.get(f"/api/clients/{existing.id}", headers=auth_headers).status_code
            == 404
        )

    def test_delete_client_with_membership_is_refused(
        self, client, auth_headers, db_session
    ):
        owner = seed_client(db_session)
        seed_membership(db_session, owner.id)

        response = client.delete(f"/api/clients/{owner.id}", headers=auth_headers)

        assert response.status_code == 409
        assert "memberships" in response.get_json()["message"]
        assert client.get(f"/api/clients/{owner.id}", headers=auth_headers).status_code == 200

    def test_unknown_client_is_404(self, client, auth_headers):
        response = client.get("/api/clients/123456789", headers=auth_headers)

        assert response.status_code == 404
        assert response.get_json() == {"message": "Client not found"}

    def test_non_numeric_id_is_404(self, client, auth_headers):
        response = client.delete("/api/clients/not-an-id", headers=auth_headers)

        assert response.status_code == 404


@pytest.mark.api
class TestPackageAndInstructorRoutes:
    def test_package_list_carries_counts(self, client, auth_headers, db_session):
        package = seed_package(db_session)
        seed_instructor(db_session, package.id)

        listed = client.get("/api/packages", headers=auth_headers).get_json()

        assert listed[0]["_count"] == {"memberships": 0, "instructors": 1}

    def test_package_validation(self, client, auth_headers):
        response = client.post(
            "/api/packages",
            json={"packageName": "Gold", "duration": "1 month", "price": 100, "days": 0},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.get_json()["errors"][0]["field"] == "days"

    def test_instructor_requires_existing_package(self, client, auth_headers):
        response = client.post(
            "/api/instructors",
            json={
                "packageId": "4040",
                "fname": "Mert",
                "dob": "1988-02-10",
                "isMale": True,
                "salary": 1000,
                "title": "Coach",
                "phoneNumber": "555",
            },
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.get_json() == {"message": "Package not found"}

    def test_instructor_embeds_package(self, client, auth_headers, db_session):
        package = seed_package(db_session, package_name="Pilates")

        response = client.post(
            "/api/instructors",
            json={
                "packageId": str(package.id),
                "fname": "Mert",
                "dob": "1988-02-10",
                "isMale": True,
                "salary": 1000,
                "title": "Coach",
                "phoneNumber": "555",
            },
            headers=auth_headers,
        )

        body = response.get_json()
        assert response.status_code == 201
        assert body["packageId"] == str(package.id)
        assert body["package"]["packageName"] == "Pilates"

    def test_package_with_instructor_cannot_be_deleted(
        self, client, auth_headers, db_session
    ):
        package = seed_package(db_session)
        seed_instructor(db_session, package.id)

        response = client.delete(f"/api/packages/{package.id}", headers=auth_headers)

        assert response.status_code == 409


@pytest.mark.api
class TestMembershipRoutes:
    def _body(self, owner, package, instructor, **overrides):
        body = {
            "clientId": str(owner.id),
            "packageId": str(package.id),
            "instructorId": str(instructor.id),
            "status": "active",
            "startDate": "2026-05-01T00:00:00Z",
            "endDate": "2026-06-01T00:00:00Z",
            "paymentDate": "2026-05-01T00:00:00Z",
            "isPaid": True,
        }
        body.update(overrides)
        return body

    def test_create_membership_embeds_references(self, client, auth_headers, db_session):
        owner = seed_client(db_session)
        package = seed_package(db_session)
        instructor = seed_instructor(db_session, package.id)

        response = client.post(
            "/api/memberships",
            json=self._body(owner, package, instructor),
            headers=auth_headers,
        )

        body = response.get_json()
        assert response.status_code == 201
        assert body["client"]["id"] == str(owner.id)
        assert body["package"]["id"] == str(package.id)
        assert body["instructor"]["id"] == str(instructor.id)
        assert body["endDate"] == "2026-06-01T00:00:00Z"
        assert body["remainSessions"] == 0

    def test_missing_client_reference_is_404(self, client, auth_headers, db_session):
        package = seed_package(db_session)
        instructor = seed_instructor(db_session, package.id)
        ghost = seed_client(db_session)
        ghost.id = 99999

        response = client.post(
            "/api/memberships",
            json=self._body(ghost, package, instructor),
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.get_json() == {"message": "Client not found"}

    def test_update_moving_end_before_start_is_rejected(
        self, client, auth_headers, db_session
    ):
        owner = seed_client(db_session)
        membership = seed_membership(db_session, owner.id)

        response = client.put(
            f"/api/memberships/{membership.id}",
            json={"endDate": "2000-01-01T00:00:00Z"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.get_json()["errors"][0]["field"] == "endDate"

    def test_mark_membership_unpaid(self, client, auth_headers, db_session):
        owner = seed_client(db_session)
        membership = seed_membership(db_session, owner.id)

        response = client.put(
            f"/api/memberships/{membership.id}",
            json={"isPaid": False},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.get_json()["isPaid"] is False


@pytest.mark.api
class TestPaymentAndSessionRoutes:
    def test_payment_roundtrip(self, client, auth_headers, db_session):
        owner = seed_client(db_session)

        created = client.post(
            "/api/payments",
            json={"clientId": str(owner.id), "paymentType": "cash"},
            headers=auth_headers,
        )

        assert created.status_code == 201
        assert created.get_json()["client"]["id"] == str(owner.id)

        listed = client.get("/api/payments", headers=auth_headers).get_json()
        assert [p["paymentType"] for p in listed] == ["cash"]

    def test_session_requires_membership(self, client, auth_headers, db_session):
        package = seed_package(db_session)
        instructor = seed_instructor(db_session, package.id)

        response = client.post(
            "/api/sessions",
            json={
                "instructorId": str(instructor.id),
                "membershipId": "777",
                "destinationDate": "2026-05-03T18:00:00Z",
                "isAttended": False,
            },
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.get_json() == {"message": "Membership not found"}

    def test_session_create_and_delete(self, client, auth_headers, db_session):
        owner = seed_client(db_session)
        membership = seed_membership(db_session, owner.id)

        created = client.post(
            "/api/sessions",
            json={
                "instructorId": str(membership.instructor_id),
                "membershipId": str(membership.id),
                "destinationDate": "2026-05-03T18:00:00Z",
                "isAttended": False,
            },
            headers=auth_headers,
        )
        session_id = created.get_json()["id"]

        assert created.status_code == 201
        assert created.get_json()["destinationDate"] == "2026-05-03T18:00:00Z"

        deleted = client.delete(f"/api/sessions/{session_id}", headers=auth_headers)
        assert deleted.status_code == 200
        assert deleted.get_json() == {"message": "Session deleted successfully"}

    def test_every_resource_requires_a_token(self, client, database):
        for path in (
            "/api/clients",
            "/api/packages",
            "/api/instructors",
            "/api/memberships",
            "/api/payments",
            "/api/sessions",
        ):
            assert client.get(path).status_code == 401
