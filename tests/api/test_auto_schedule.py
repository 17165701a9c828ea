import pytest


class TestPreview:

    def test_same_supervisor_spread(self, client, make_store, make_campaign):
        a = make_store("T001", "Central", "S1")
        b = make_store("T002", "Riverside", "S1")
        campaign = make_campaign("2024-03-01", "2024-03-31")

        resp = client.post(f"/api/v1/campaigns/{campaign['id']}/auto-schedule")
        assert resp.status_code == 200
        data = resp.json()

        assert data["success"] is True
        assert data["unplaced"] == []
        placed = {p["store_id"]: p["activity_date"] for p in data["placed"]}
        assert placed == {a["id"]: "2024-03-02", b["id"]: "2024-03-06"}
        assert data["summary"].startswith("Auto-scheduled 2/2 stores.")

    def test_preview_saves_nothing(self, client, make_store, make_campaign):
        make_store("T001", "Central", "S1")
        campaign = make_campaign("2024-03-01", "2024-03-31")

        client.post(f"/api/v1/campaigns/{campaign['id']}/auto-schedule")
        resp = client.get("/api/v1/campaign-schedules", params={"campaign_id": campaign["id"]})
        assert resp.json() == []

    def test_blocked_event_excluded(self, client, make_store, make_campaign):
        make_store("T001", "Central", "S1")
        campaign = make_campaign("2024-03-01", "2024-03-10")
        client.post(
            "/api/v1/event-dates",
            json={"event_date": "2024-03-02", "event_type": "holiday", "is_blocked": True},
        )

        data = client.post(f"/api/v1/campaigns/{campaign['id']}/auto-schedule").json()
        assert data["candidate_dates"] == ["2024-03-03", "2024-03-06", "2024-03-09", "2024-03-10"]
        assert data["placed"][0]["activity_date"] == "2024-03-03"

    def test_weekend_forbidden_setting(self, client, make_store, make_campaign):
        store = make_store("T001", "Central", "S1")
        campaign = make_campaign("2024-03-01", "2024-03-31")
        client.post(
            "/api/v1/store-activity-settings",
            json={"store_id": store["id"], "forbidden_days": [6, 7]},
        )

        data = client.post(f"/api/v1/campaigns/{campaign['id']}/auto-schedule").json()
        assert data["placed"] == [{"store_id": store["id"], "activity_date": "2024-03-06", "relaxed": False}]

    def test_inactive_store_ignored(self, client, make_store, make_campaign):
        make_store("T001", "Central", "S1")
        make_store("T002", "Closed", "S2", is_active=False)
        campaign = make_campaign("2024-03-01", "2024-03-31")

        data = client.post(f"/api/v1/campaigns/{campaign['id']}/auto-schedule").json()
        assert len(data["placed"]) == 1

    def test_empty_pool(self, client, make_store, make_campaign):
        make_store("T001", "Central", "S1")
        campaign = make_campaign("2024-03-04", "2024-03-04")

        data = client.post(f"/api/v1/campaigns/{campaign['id']}/auto-schedule").json()
        assert data["success"] is False
        assert "No schedulable dates" in data["error"]
        assert data["placed"] == []
        assert data["unplaced"][0]["reason_code"] == "EMPTY_POOL"

    def test_unknown_campaign(self, client):
        resp = client.post("/api/v1/campaigns/999/auto-schedule")
        assert resp.status_code == 404


class TestApply:

    @pytest.fixture
    def wednesday_only(self, make_store, make_campaign):
        for i in range(1, 4):
            make_store(f"T00{i}", f"Store {i}", f"P{i}")
        return make_campaign("2024-03-06", "2024-03-06")

    def test_apply_full_schedule(self, client, make_store, make_campaign):
        make_store("T001", "Central", "S1")
        make_store("T002", "Riverside", "S1")
        campaign = make_campaign("2024-03-01", "2024-03-31")

        resp = client.post(f"/api/v1/campaigns/{campaign['id']}/auto-schedule/apply")
        assert resp.status_code == 200
        assert len(resp.json()["saved"]) == 2

        rows = client.get("/api/v1/campaign-schedules", params={"campaign_id": campaign["id"]}).json()
        assert [r["activity_date"] for r in rows] == ["2024-03-02", "2024-03-06"]

    def test_partial_needs_confirmation(self, client, wednesday_only):
        url = f"/api/v1/campaigns/{wednesday_only['id']}/auto-schedule/apply"

        resp = client.post(url)
        assert resp.status_code == 409
        assert "1 stores could not be scheduled" in resp.json()["detail"]

        rows = client.get("/api/v1/campaign-schedules", params={"campaign_id": wednesday_only["id"]}).json()
        assert rows == []

    def test_partial_confirmed(self, client, wednesday_only):
        url = f"/api/v1/campaigns/{wednesday_only['id']}/auto-schedule/apply"

        resp = client.post(url, json={"confirm_partial": True})
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["saved"]) == 2
        assert data["unplaced"][0]["store_name"] == "Store 3"
        assert data["unplaced"][0]["reason_code"] == "CAPACITY"

    def test_apply_replaces_existing(self, client, make_store, make_campaign):
        store = make_store("T001", "Central", "S1")
        campaign = make_campaign("2024-03-01", "2024-03-31")
        client.post(
            "/api/v1/campaign-schedules",
            json={"campaign_id": campaign["id"], "store_id": store["id"], "activity_date": "2024-03-20"},
        )

        client.post(f"/api/v1/campaigns/{campaign['id']}/auto-schedule/apply")
        rows = client.get("/api/v1/campaign-schedules", params={"campaign_id": campaign["id"]}).json()
        assert [(r["store_id"], r["activity_date"]) for r in rows] == [(store["id"], "2024-03-02")]

    def test_empty_pool_conflict(self, client, make_store, make_campaign):
        make_store("T001", "Central", "S1")
        campaign = make_campaign("2024-03-04", "2024-03-04")

        resp = client.post(
            f"/api/v1/campaigns/{campaign['id']}/auto-schedule/apply",
            json={"confirm_partial": True},
        )
        assert resp.status_code == 409
        assert "No schedulable dates" in resp.json()["detail"]
