"""Integration tests for the dashboard counters and recent activity feed."""

from datetime import datetime, timedelta, timezone

import pytest

from gym_backoffice.domain.entities import TrainingSession
from gym_backoffice.repositories.training_session_repo import TrainingSessionRepository
from gym_backoffice.repositories.visit_repo import VisitRepository
from tests.factories.data_factories import seed_client, seed_membership


@pytest.mark.api
class TestDashboard:
    def test_stats_on_empty_database(self, client, auth_headers):
        response = client.get("/api/dashboard/stats", headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json() == {
            "totalClients": 0,
            "totalPackages": 0,
            "totalInstructors": 0,
            "activeMemberships": 0,
            "activeGymSessions": 0,
            "todayGymSessions": 0,
            "totalPayments": 0,
            "activeSessions": 0,
        }

    def test_stats_follow_visits_and_memberships(self, client, auth_headers, db_session):
        now = datetime.now(timezone.utc)
        inside = seed_client(db_session, fname="Inside")
        lapsed = seed_client(db_session, fname="Lapsed", social_number="2")
        membership = seed_membership(db_session, inside.id)
        seed_membership(db_session, lapsed.id, end_date=now - timedelta(days=2))
        TrainingSessionRepository(db_session).create(
            TrainingSession(
                instructor_id=membership.instructor_id,
                membership_id=membership.id,
                destination_date=now + timedelta(days=1),
                is_attended=False,
            )
        )
        client.post(
            "/api/gym-sessions", json={"clientId": str(inside.id)}, headers=auth_headers
        )

        stats = client.get("/api/dashboard/stats", headers=auth_headers).get_json()

        assert stats["totalClients"] == 2
        assert stats["totalPackages"] == 2
        assert stats["activeMemberships"] == 1
        assert stats["activeGymSessions"] == 1
        assert stats["todayGymSessions"] == 1
        assert stats["activeSessions"] == 1

    def test_exit_lowers_active_count_but_not_today_count(
        self, client, auth_headers, db_session
    ):
        member = seed_client(db_session)
        seed_membership(db_session, member.id)
        visit = client.post(
            "/api/gym-sessions", json={"clientId": str(member.id)}, headers=auth_headers
        ).get_json()
        client.put(f"/api/gym-sessions/{visit['id']}/exit", headers=auth_headers)

        stats = client.get("/api/dashboard/stats", headers=auth_headers).get_json()

        assert stats["activeGymSessions"] == 0
        assert stats["todayGymSessions"] == 1

    def test_recent_activity_lists_open_visits(self, client, auth_headers, db_session):
        member = seed_client(db_session, fname="Present")
        seed_membership(db_session, member.id)
        VisitRepository(db_session).create_open(
            member.id, datetime.now(timezone.utc), 3
        )

        response = client.get("/api/dashboard/recent-activity", headers=auth_headers)

        body = response.get_json()
        assert response.status_code == 200
        assert [c["fname"] for c in body["recentClients"]] == ["Present"]
        assert len(body["recentMemberships"]) == 1
        assert body["recentPayments"] == []
        assert body["activeGymSessions"][0]["client"]["fname"] == "Present"
        assert body["activeGymSessions"][0]["lockerNumber"] == 3

    def test_recent_clients_are_capped_at_five(self, client, auth_headers, db_session):
        for n in range(7):
            seed_client(db_session, fname=f"C{n}", social_number=str(n))

        body = client.get(
            "/api/dashboard/recent-activity", headers=auth_headers
        ).get_json()

        assert [c["fname"] for c in body["recentClients"]] == [
            "C6",
            "C5",
            "C4",
            "C3",
            "C2",
        ]

    def test_dashboard_requires_token(self, client, database):
        assert client.get("/api/dashboard/stats").status_code == 401
        assert client.get("/api/dashboard/recent-activity").status_code == 401
