import pytest


class TestDashboardStats:
    def test_empty_defaults(self, client):
        r = client.get("/api/dashboard/stats")
        assert r.status_code == 200
        data = r.json()
        assert data["today_count"] == 0
        assert data["week_count"] == 0
        assert data["total_submitted"] == 0
        assert data["daily_quota"] == 8
        assert data["bot_enabled"] is True
        assert data["ai_spend_total"] == 0
        assert data["recent_applications"] == []

    def test_counts(self, client, completion):
        ids = []
        for n in range(3):
            r = client.post("/api/jobs", json={
                "title": f"PM {n}", "company": "Acme", "url": f"https://example.com/{n}",
            })
            ids.append(r.json()["id"])
        client.patch(f"/api/jobs/{ids[0]}", json={"status": "queued"})
        client.post(f"/api/jobs/{ids[1]}/apply")
        completion.queue('{"match_quality": "perfect", "match_confidence": 90, "match_reasoning": "ok"}')
        client.post(f"/api/jobs/{ids[2]}/analyze")

        data = client.get("/api/dashboard/stats").json()
        assert data["today_count"] == 1
        assert data["week_count"] == 1
        assert data["total_submitted"] == 1
        assert data["queued_jobs"] == 1
        assert data["perfect_match_jobs"] == 1
        assert data["ai_spend_total"] == pytest.approx(0.00165, abs=1e-4)
        assert data["recent_applications"][0]["job"]["title"] == "PM 1"

    def test_reads_settings(self, client):
        client.post("/api/settings", json={"key": "daily_quota", "value": {"total": 5}})
        client.post("/api/settings", json={"key": "bot_enabled", "value": {"enabled": False}})
        data = client.get("/api/dashboard/stats").json()
        assert data["daily_quota"] == 5
        assert data["bot_enabled"] is False
