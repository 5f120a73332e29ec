"""HTTP-level tests, run once per store backend (see conftest.provider)."""

from datetime import datetime, timedelta, timezone

import pytest

from conftest import bearer


def _iso(dt):
    return dt.isoformat()


def _signup(client, username, password="pw"):
    resp = client.post("/api/auth/signup", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


class TestAuth:

    def test_signup_and_me(self, client):
        body = _signup(client, "ann")
        assert body["user"]["role"] == "member"

        me = client.get("/api/auth/me", headers=bearer(body["token"]))

        assert me.status_code == 200
        assert me.json()["user"] == body["user"]

    def test_signup_as_admin_forbidden(self, client):
        resp = client.post("/api/auth/signup", json={"username": "eve", "password": "pw", "role": "admin"})
        assert resp.status_code == 403
        assert "Admin accounts cannot be created" in resp.json()["error"]

    def test_signup_missing_fields(self, client):
        resp = client.post("/api/auth/signup", json={"username": "ann"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "username and password required"}

    def test_duplicate_signup(self, client):
        _signup(client, "ann")
        resp = client.post("/api/auth/signup", json={"username": "ann", "password": "pw"})
        assert resp.status_code == 409

    def test_bad_login(self, client):
        resp = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "invalid credentials"}

    def test_missing_and_invalid_tokens(self, client):
        assert client.get("/api/auth/me").status_code == 401
        assert client.get("/api/auth/me", headers=bearer("garbage")).status_code == 401

    def test_users_listing(self, client, member_headers):
        rows = client.get("/api/auth/users", headers=member_headers).json()
        assert [r["username"] for r in rows] == ["admin", "user1"]
        assert "created_at" not in rows[0]


class TestInteractions:

    def test_log_and_list_own(self, client, member_headers):
        when = datetime(2026, 9, 20, 9, 30, tzinfo=timezone.utc)
        resp = client.post(
            "/api/interactions",
            json={"contactUserId": 1, "when": _iso(when), "durationMinutes": 25, "notes": "coffee"},
            headers=member_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["ok"] is True

        rows = client.get("/api/interactions", headers=member_headers).json()

        assert len(rows) == 1
        assert rows[0]["user_id"] == 2
        assert rows[0]["contact_user_id"] == 1
        assert rows[0]["duration_minutes"] == 25
        assert datetime.fromisoformat(rows[0]["when_ts"].replace("Z", "+00:00")) == when

    def test_counterpart_required(self, client, member_headers):
        resp = client.post("/api/interactions", json={"durationMinutes": 5}, headers=member_headers)
        assert resp.status_code == 400
        assert resp.json() == {"error": "contactUserId required"}

    def test_counterpart_outside_id_range(self, client, member_headers):
        resp = client.post("/api/interactions", json={"contactUserId": 10**20}, headers=member_headers)
        assert resp.status_code == 400
        assert resp.json() == {"error": "contactUserId must be a user id"}
        assert client.get("/api/interactions", headers=member_headers).json() == []

    def test_wrong_type_body_is_400_error(self, client, member_headers):
        resp = client.post("/api/interactions", json={"contactUserId": "abc"}, headers=member_headers)

        assert resp.status_code == 400
        body = resp.json()
        assert list(body) == ["error"]
        assert body["error"].startswith("contactUserId: ")

    def test_listing_filter_outside_id_range(self, client, admin_headers):
        resp = client.get("/api/interactions", params={"userId": str(10**20)}, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("userId: ")

    def test_member_cannot_list_others(self, client, admin_headers, member_headers):
        client.post("/api/interactions", json={"contactUserId": 7}, headers=admin_headers)

        own = client.get("/api/interactions", params={"userId": 1}, headers=member_headers).json()
        other = client.get("/api/interactions", params={"userId": 7}, headers=admin_headers).json()

        assert own == []
        assert [r["user_id"] for r in other] == [1]

    def test_requires_auth(self, client):
        assert client.post("/api/interactions", json={"contactUserId": 1}).status_code == 401


class TestAdminTrace:

    def _setup_contacts(self, client, member_headers):
        now = datetime.now(timezone.utc)
        carl = _signup(client, "carl")
        carl_headers = bearer(carl["token"])
        client.post(
            "/api/interactions",
            json={"contactUserId": 2, "when": _iso(now - timedelta(days=1)), "durationMinutes": 30},
            headers=carl_headers,
        )
        client.post(
            "/api/interactions",
            json={"contactUserId": 2, "when": _iso(now - timedelta(hours=2)), "durationMinutes": 10},
            headers=carl_headers,
        )
        client.post(
            "/api/interactions",
            json={"contactUserId": 1, "when": _iso(now - timedelta(days=20)), "durationMinutes": 10},
            headers=member_headers,
        )
        return carl["user"]["id"]

    def test_trace_returns_latest_per_contact(self, client, admin_headers, member_headers):
        carl_id = self._setup_contacts(client, member_headers)

        resp = client.post("/api/admin/trace", json={"caseUserId": 2, "windowDays": 14}, headers=admin_headers)

        assert resp.status_code == 200
        rows = resp.json()
        assert [(r["contactId"], r["displayName"], r["durationMinutes"]) for r in rows] == [(carl_id, "carl", 10)]
        assert "lastContactAt" in rows[0]

    def test_trace_default_window_and_string_subject(self, client, admin_headers, member_headers):
        self._setup_contacts(client, member_headers)

        default = client.post("/api/admin/trace", json={"caseUserId": "2"}, headers=admin_headers).json()
        wide = client.post("/api/admin/trace", json={"caseUserId": 2, "windowDays": 30}, headers=admin_headers).json()

        assert [r["displayName"] for r in default] == ["carl"]
        assert sorted(r["displayName"] for r in wide) == ["admin", "carl"]

    @pytest.mark.parametrize("window", [0, 91, -5])
    def test_trace_window_out_of_range(self, client, admin_headers, window):
        resp = client.post("/api/admin/trace", json={"caseUserId": 2, "windowDays": window}, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json() == {"error": "windowDays must be between 1 and 90"}

    def test_trace_requires_subject(self, client, admin_headers):
        resp = client.post("/api/admin/trace", json={"windowDays": 14}, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json() == {"error": "caseUserId required"}

    @pytest.mark.parametrize("subject", [10**20, str(-(10**20))])
    def test_trace_subject_outside_id_range(self, client, admin_headers, subject):
        resp = client.post("/api/admin/trace", json={"caseUserId": subject}, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json() == {"error": "caseUserId must be a user id"}

    def test_trace_is_admin_only(self, client, member_headers):
        resp = client.post("/api/admin/trace", json={"caseUserId": 2}, headers=member_headers)
        assert resp.status_code == 403
        assert resp.json() == {"error": "admin only"}


class TestAdminCasesAndNotifications:

    def test_report_and_list_cases(self, client, admin_headers):
        first = client.post(
            "/api/admin/cases", json={"userId": 2, "reportedAt": "2026-09-01T00:00:00Z"}, headers=admin_headers
        )
        second = client.post("/api/admin/cases", json={"userId": 2}, headers=admin_headers)
        assert first.status_code == second.status_code == 200
        assert first.json()["case"]["reported_by"] == 1

        rows = client.get("/api/admin/cases", headers=admin_headers).json()

        assert [r["id"] for r in rows] == [second.json()["case"]["id"], first.json()["case"]["id"]]
        assert rows[0]["username"] == "user1"

    def test_case_requires_user(self, client, admin_headers):
        resp = client.post("/api/admin/cases", json={}, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json() == {"error": "userId required"}

    def test_simulate_notify_and_mark_read(self, client, admin_headers, member_headers):
        resp = client.post("/api/admin/simulate-notify", json={"userId": 2, "caseId": None}, headers=admin_headers)
        assert resp.status_code == 200
        notification = resp.json()["notification"]
        assert notification["read"] is False
        assert notification["message"].startswith("Hello, this is the Epidemiology Prevention Center.")

        mine = client.get("/api/notifications", headers=member_headers).json()
        assert [n["id"] for n in mine] == [notification["id"]]

        # only the recipient may mark it read
        assert client.post(f"/api/notifications/{notification['id']}/mark-read", headers=admin_headers).status_code == 404
        marked = client.post(f"/api/notifications/{notification['id']}/mark-read", headers=member_headers)
        assert marked.status_code == 200
        assert marked.json()["notification"]["read"] is True

    def test_huge_ids_rejected(self, client, admin_headers, member_headers):
        case = client.post("/api/admin/cases", json={"userId": 10**20}, headers=admin_headers)
        notify = client.post("/api/admin/simulate-notify", json={"userId": 10**20}, headers=admin_headers)
        mark = client.post(f"/api/notifications/{10**20}/mark-read", headers=member_headers)

        assert (case.status_code, case.json()) == (400, {"error": "userId must be a user id"})
        assert (notify.status_code, notify.json()) == (400, {"error": "userId must be a user id"})
        assert mark.status_code == 400
        assert "detail" not in mark.json()

    def test_simulate_notify_requires_user(self, client, admin_headers):
        resp = client.post("/api/admin/simulate-notify", json={}, headers=admin_headers)
        assert resp.status_code == 400

    def test_templates(self, client, admin_headers):
        created = client.post(
            "/api/admin/notification-templates", json={"message": "Please get tested."}, headers=admin_headers
        ).json()
        assert created["template"]["name"] == f"template-{created['template']['id']}"

        rows = client.get("/api/admin/notification-templates", headers=admin_headers).json()
        assert [r["message"] for r in rows] == ["Please get tested."]

    def test_admin_listings(self, client, admin_headers, member_headers):
        client.post("/api/interactions", json={"contactUserId": 1, "durationMinutes": 3}, headers=member_headers)

        users = client.get("/api/admin/users", headers=admin_headers).json()
        interactions = client.get("/api/admin/interactions", headers=admin_headers).json()

        assert {u["username"] for u in users} == {"admin", "user1"}
        assert all("created_at" in u for u in users)
        assert interactions[0]["user_username"] == "user1"
        assert interactions[0]["contact_username"] == "admin"

    def test_member_blocked_from_admin_routes(self, client, member_headers):
        for path in ("/api/admin/users", "/api/admin/cases", "/api/admin/interactions"):
            assert client.get(path, headers=member_headers).status_code == 403


def test_dependency_failure_is_generic_500(client, admin_headers, monkeypatch):
    from contact_tracing.core.errors import DependencyFailure
    from contact_tracing.store.memory import MemoryStore
    from contact_tracing.store.sql import SqlStore

    def broken(self, user_id):
        raise DependencyFailure("connection refused")

    monkeypatch.setattr(MemoryStore, "interactions_for_user", broken)
    monkeypatch.setattr(SqlStore, "interactions_for_user", broken)

    resp = client.post("/api/admin/trace", json={"caseUserId": 2}, headers=admin_headers)

    assert resp.status_code == 500
    assert resp.json() == {"error": "server error"}
