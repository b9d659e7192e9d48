import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from jobbot.models.bot_setting import BotSetting
from jobbot.schemas.settings import CandidateProfile, DailyQuota, split_list

logger = logging.getLogger(__name__)

USER_PROFILE = "user_profile"
FEED_URLS = "feed_urls"
DAILY_QUOTA = "daily_quota"
BOT_ENABLED = "bot_enabled"
COMPANY_WEEKLY_LIMIT = "company_weekly_limit"

DEFAULT_COMPANY_WEEKLY_LIMIT = 2


class BotSettingsRepository:
    """
    Typed access to the ``bot_settings`` key/value table.

    Values are free-form JSON documents written by the dashboard, so every
    accessor falls back to a default when a key is missing or malformed.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str, default: Any = None) -> Any:
        row = self.db.query(BotSetting).filter(BotSetting.setting_key == key).first()
        if row is None or row.setting_value is None:
            return default
        return row.setting_value

    def set(self, key: str, value: Any) -> None:
        now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        row = self.db.query(BotSetting).filter(BotSetting.setting_key == key).first()
        if row is None:
            self.db.add(BotSetting(setting_key=key, setting_value=value, updated_at=now))
        else:
            row.setting_value = value
            row.updated_at = now
        self.db.commit()

    def all(self) -> dict[str, Any]:
        rows = self.db.query(BotSetting).order_by(BotSetting.setting_key).all()
        return {row.setting_key: row.setting_value for row in rows}

    def get_user_profile(self) -> CandidateProfile:
        value = self.get(USER_PROFILE)
        if not isinstance(value, dict):
            if value is not None:
                logger.warning("Ignoring malformed %s setting", USER_PROFILE)
            return CandidateProfile()
        return CandidateProfile.model_validate(value)

    def get_feed_urls(self) -> list[str]:
        return split_list(self.get(FEED_URLS))

    def get_daily_quota(self) -> DailyQuota:
        value = self.get(DAILY_QUOTA)
        if isinstance(value, int) and not isinstance(value, bool):
            return DailyQuota(total=value)
        if not isinstance(value, dict):
            return DailyQuota()
        defaults = DailyQuota()
        return DailyQuota(
            total=_as_int(value.get("total"), defaults.total),
            perfect_match=_as_int(value.get("perfect_match"), defaults.perfect_match),
            wider_net=_as_int(value.get("wider_net"), defaults.wider_net),
        )

    def is_bot_enabled(self) -> bool:
        value = self.get(BOT_ENABLED)
        if isinstance(value, dict):
            value = value.get("enabled")
        return value if isinstance(value, bool) else True

    def get_company_weekly_limit(self) -> int:
        value = self.get(COMPANY_WEEKLY_LIMIT)
        if isinstance(value, dict):
            value = value.get("limit")
        return _as_int(value, DEFAULT_COMPANY_WEEKLY_LIMIT)


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
