import json

from jobbot.errors import CompletionError, FetchTimeoutError
from jobbot.models.ai_usage_log import AiUsageLog

JOB_URL = "https://careers.example.com/jobs/42"

PAGE = """
<html><head><title>Careers</title><script>track()</script></head>
<body>
<h1>Senior Product Manager</h1>
<p>Acme is hiring a Senior Product Manager to own our payments roadmap. You will
work with engineering, design and sales to ship features used by millions of
people. Requirements: 5+ years of product management, strong SQL, fintech
experience. Salary: $150,000 - $190,000. Location: Austin, TX or remote.</p>
</body></html>
"""

EXTRACTED = {
    "title": "Senior Product Manager",
    "company": "Acme",
    "location": "Austin, TX",
    "remote": True,
    "description": "Own the payments roadmap.",
    "requirements": "5+ years of product management",
    "salary_min": 150000,
    "salary_max": 190000,
}


class TestImportUrl:
    def _import(self, client, url=JOB_URL):
        return client.post("/api/jobs/import-url", json={"url": url})

    def test_imports_job(self, client, page_fetcher, completion, db):
        page_fetcher.pages[JOB_URL] = PAGE
        completion.queue("Here you go:\n" + json.dumps(EXTRACTED))

        r = self._import(client)
        assert r.status_code == 201
        data = r.json()
        assert data["title"] == "Senior Product Manager"
        assert data["company"] == "Acme"
        assert data["source"] == "url_import"
        assert data["status"] == "discovered"
        assert data["fingerprint"] == JOB_URL
        assert data["salary_max"] == 190000
        assert data["remote"] is True

        # Script bodies never reach the prompt.
        assert "track()" not in completion.prompts[0]
        assert "Senior Product Manager" in completion.prompts[0]
        assert completion.max_tokens == [2048]

        logs = db.query(AiUsageLog).all()
        assert [(log.operation, log.job_id) for log in logs] == [("url_import", data["id"])]

    def test_rejects_invalid_url(self, client, page_fetcher):
        r = self._import(client, url="ftp://example.com/job")
        assert r.status_code == 400
        assert r.json()["detail"] == "A valid URL is required"
        assert page_fetcher.requested == []

    def test_missing_url(self, client):
        assert client.post("/api/jobs/import-url", json={}).status_code == 400

    def test_duplicate_returns_existing_id(self, client, page_fetcher, completion):
        existing = client.post("/api/jobs", json={
            "title": "PM", "company": "Acme", "url": JOB_URL,
        }).json()

        r = self._import(client)
        assert r.status_code == 409
        assert r.json()["job_id"] == existing["id"]
        assert page_fetcher.requested == []
        assert completion.prompts == []

    def test_fetch_failure(self, client):
        r = self._import(client)
        assert r.status_code == 422
        assert r.json()["detail"] == "Could not fetch the URL: HTTP 404"
        assert r.json()["upstream_status"] == 404

    def test_fetch_timeout(self, client, page_fetcher):
        page_fetcher.pages[JOB_URL] = FetchTimeoutError("Timed out after 15s")
        r = self._import(client)
        assert r.status_code == 422
        assert r.json()["detail"] == "Could not fetch the URL: Timed out after 15s"

    def test_page_too_short(self, client, page_fetcher, completion):
        page_fetcher.pages[JOB_URL] = "<html><body>Access denied</body></html>"
        r = self._import(client)
        assert r.status_code == 422
        assert completion.prompts == []

    def test_reply_without_json(self, client, page_fetcher, completion, db):
        page_fetcher.pages[JOB_URL] = PAGE
        completion.queue("I couldn't find a job posting on this page.")
        r = self._import(client)
        assert r.status_code == 500
        assert db.query(AiUsageLog).count() == 0

    def test_incomplete_extraction(self, client, page_fetcher, completion):
        page_fetcher.pages[JOB_URL] = PAGE
        completion.queue(json.dumps({**EXTRACTED, "company": None}))
        r = self._import(client)
        assert r.status_code == 422
        assert "title or company" in r.json()["detail"]

    def test_completion_failure(self, client, page_fetcher, completion):
        page_fetcher.pages[JOB_URL] = PAGE
        completion.queue(CompletionError("Completion request failed: overloaded"))
        r = self._import(client)
        assert r.status_code == 500
        assert "overloaded" in r.json()["detail"]


class TestImportEndToEnd:
    def test_minimal_page(self, client, page_fetcher, completion, db):
        url = "https://jobs.example.com/x"
        body = "Senior PM at Acme. " + "We build tools for product teams. " * 7
        html = f"<html><body><p>{body[:230]}</p></body></html>"
        assert len(html) >= 250
        page_fetcher.pages[url] = html
        completion.queue('{"title": "Senior PM", "company": "Acme", "remote": false}')

        r = client.post("/api/jobs/import-url", json={"url": url})
        assert r.status_code == 201
        assert r.json()["source"] == "url_import"
        assert r.json()["status"] == "discovered"
        assert [log.operation for log in db.query(AiUsageLog).all()] == ["url_import"]

        again = client.post("/api/jobs/import-url", json={"url": url})
        assert again.status_code == 409
        assert again.json()["job_id"] == r.json()["id"]
        assert len(completion.prompts) == 1

    def test_overflowing_salary_is_dropped(self, client, page_fetcher, completion):
        page_fetcher.pages[JOB_URL] = PAGE
        completion.queue('{"title": "Senior PM", "company": "Acme", "salary_min": "1e400", "salary_max": 1e20}')

        r = client.post("/api/jobs/import-url", json={"url": JOB_URL})
        assert r.status_code == 201
        assert r.json()["salary_min"] is None
        assert r.json()["salary_max"] is None
