import json

import pytest

from jobbot.models.ai_usage_log import AiUsageLog
from jobbot.models.job import Job


def _analysis(quality="perfect", confidence=88, reasoning="## Strengths\n- **Fintech** background"):
    return json.dumps({
        "match_quality": quality,
        "match_confidence": confidence,
        "match_reasoning": reasoning,
    })


class TestAnalyzeJob:
    def _create_job(self, client, n=0):
        r = client.post("/api/jobs", json={
            "title": f"Product Manager {n}",
            "company": "Acme",
            "url": f"https://example.com/jobs/{n}",
        })
        return r.json()["id"]

    def test_analyze_single_job(self, client, completion, db):
        client.post("/api/settings", json={
            "key": "user_profile",
            "value": {"name": "Sam", "skills": "roadmaps, SQL", "target_salary": "$180,000"},
        })
        job_id = self._create_job(client)
        completion.queue("Analysis:\n" + _analysis())

        r = client.post(f"/api/jobs/{job_id}/analyze")
        assert r.status_code == 200
        data = r.json()
        assert data["match_quality"] == "perfect"
        assert data["match_confidence"] == 88
        assert data["match_reasoning_html"] == (
            "<h2>Strengths</h2>\n<ul><li><strong>Fintech</strong> background</li></ul>"
        )
        assert "Key Skills: roadmaps, SQL" in completion.prompts[0]
        assert "Target Salary: $180,000" in completion.prompts[0]
        assert db.query(AiUsageLog).one().operation == "job_scoring"

    def test_analyze_clamps_and_normalises(self, client, completion):
        job_id = self._create_job(client)
        completion.queue(_analysis(quality="excellent", confidence=140))

        data = client.post(f"/api/jobs/{job_id}/analyze").json()
        assert data["match_quality"] == "wider_net"
        assert data["match_confidence"] == 100

    def test_analyze_missing_job(self, client):
        assert client.post("/api/jobs/nope/analyze").status_code == 404

    def test_analyze_bad_reply_leaves_job_unscored(self, client, completion):
        job_id = self._create_job(client)
        completion.queue("I am unable to evaluate this.")

        assert client.post(f"/api/jobs/{job_id}/analyze").status_code == 500
        assert client.get(f"/api/jobs/{job_id}").json()["match_quality"] is None


class TestAnalyzeAll:
    def _create_jobs(self, client, count):
        ids = []
        for n in range(count):
            r = client.post("/api/jobs", json={
                "title": f"PM {n}", "company": "Acme", "url": f"https://example.com/jobs/{n}",
            })
            ids.append(r.json()["id"])
        return ids

    def test_nothing_pending(self, client):
        r = client.post("/api/jobs/analyze-all")
        assert r.status_code == 200
        assert r.json() == {
            "analyzed": 0,
            "remaining": 0,
            "total_cost": 0,
            "failed": 0,
            "results": [],
            "message": "All jobs already analysed",
        }

    def test_pending_count(self, client):
        self._create_jobs(client, 3)
        assert client.get("/api/jobs/analyze-all").json() == {"unanalyzed": 3}

    def test_scores_a_batch(self, client, completion):
        self._create_jobs(client, 3)
        completion.queue(_analysis(), _analysis("wider_net", 60), _analysis("no_match", 10))

        data = client.post("/api/jobs/analyze-all").json()
        assert data["analyzed"] == 3
        assert data["remaining"] == 0
        assert data["failed"] == 0
        assert data["total_cost"] == pytest.approx(0.005, abs=1e-4)
        assert sorted(r["match_quality"] for r in data["results"]) == ["no_match", "perfect", "wider_net"]
        assert "message" not in data

    def test_batch_is_capped(self, client, completion, db):
        self._create_jobs(client, 12)
        completion.queue(*[_analysis()] * 10)

        data = client.post("/api/jobs/analyze-all").json()
        assert data["analyzed"] == 10
        assert data["remaining"] == 2
        assert db.query(Job).filter(Job.match_quality.is_(None)).count() == 2

    def test_one_failure_does_not_stop_the_batch(self, client, completion):
        self._create_jobs(client, 3)
        completion.queue(_analysis(), "not json at all", _analysis())

        data = client.post("/api/jobs/analyze-all").json()
        assert data["analyzed"] == 2
        assert data["failed"] == 1
        assert data["remaining"] == 1
        assert client.get("/api/jobs/analyze-all").json() == {"unanalyzed": 1}

    def test_newest_discovered_scored_first(self, client, completion, db):
        ids = self._create_jobs(client, 12)
        # Later-created jobs get older dates, so insertion order can't explain the pick.
        for n, job_id in enumerate(ids):
            db.query(Job).filter(Job.id == job_id).update(
                {"discovered_date": f"2024-01-{12 - n:02d}T09:00:00Z"}
            )
        db.commit()
        completion.queue(*[_analysis()] * 10)

        client.post("/api/jobs/analyze-all")
        db.expire_all()
        unscored = {j.id for j in db.query(Job).filter(Job.match_quality.is_(None)).all()}
        assert unscored == {ids[10], ids[11]}

    def test_same_second_ties_fall_back_to_insertion_order(self, client, completion, db):
        ids = self._create_jobs(client, 12)
        db.query(Job).update({"discovered_date": "2024-01-01T09:00:00Z"})
        db.commit()
        completion.queue(*[_analysis()] * 10)

        client.post("/api/jobs/analyze-all")
        db.expire_all()
        unscored = {j.id for j in db.query(Job).filter(Job.match_quality.is_(None)).all()}
        assert unscored == {ids[0], ids[1]}
