import pytest

from jobbot.services.settings_service import BotSettingsRepository


class TestSettingsApi:
    def test_empty(self, client):
        assert client.get("/api/settings").json() == {}

    def test_upsert(self, client):
        client.post("/api/settings", json={"key": "feed_urls", "value": ["https://a.example.com/rss"]})
        r = client.post("/api/settings", json={"key": "feed_urls", "value": ["https://b.example.com/rss"]})
        assert r.status_code == 200
        assert r.json() == {"success": True, "key": "feed_urls"}
        assert client.get("/api/settings").json() == {"feed_urls": ["https://b.example.com/rss"]}

    def test_blank_key(self, client):
        assert client.post("/api/settings", json={"key": " ", "value": 1}).status_code == 400


class TestBotSettingsRepository:
    @pytest.fixture
    def repo(self, db):
        return BotSettingsRepository(db)

    def test_defaults(self, repo):
        assert repo.get_feed_urls() == []
        assert repo.get_daily_quota().total == 8
        assert repo.is_bot_enabled() is True
        assert repo.get_company_weekly_limit() == 2
        assert repo.get_user_profile().name is None

    def test_feed_urls_accepts_comma_string(self, repo):
        repo.set("feed_urls", "https://a.example.com/rss, ,https://b.example.com/rss")
        assert repo.get_feed_urls() == ["https://a.example.com/rss", "https://b.example.com/rss"]

    def test_daily_quota_shapes(self, repo):
        repo.set("daily_quota", 12)
        assert repo.get_daily_quota().total == 12
        repo.set("daily_quota", {"total": "6", "perfect_match": None})
        quota = repo.get_daily_quota()
        assert (quota.total, quota.perfect_match, quota.wider_net) == (6, 3, 5)

    def test_bot_enabled_shapes(self, repo):
        repo.set("bot_enabled", False)
        assert repo.is_bot_enabled() is False
        repo.set("bot_enabled", {"enabled": "nope"})
        assert repo.is_bot_enabled() is True

    def test_malformed_profile_falls_back(self, repo):
        repo.set("user_profile", "not a profile")
        assert repo.get_user_profile().skills == []

    def test_profile_coercion(self, repo):
        repo.set("user_profile", {"name": "Sam", "years_experience": 7, "skills": ["SQL", ""], "extra": 1})
        profile = repo.get_user_profile()
        assert profile.years_experience == "7"
        assert profile.skills == ["SQL"]

    def test_profile_salary_out_of_range(self, repo):
        repo.set("user_profile", {"target_salary": "1e400"})
        assert repo.get_user_profile().target_salary is None
        repo.set("user_profile", {"target_salary": 1e20})
        assert repo.get_user_profile().target_salary is None
