from fastapi import Depends
from sqlalchemy.orm import Session

from jobbot.config import settings
from jobbot.database import get_db
from jobbot.services.completion import CompletionClient
from jobbot.services.fetcher import Fetcher
from jobbot.services.settings_service import BotSettingsRepository


def get_completion_client() -> CompletionClient:
    return CompletionClient(model=settings.model, api_key=settings.anthropic_api_key)


def get_page_fetcher() -> Fetcher:
    return Fetcher(
        user_agent=settings.page_user_agent,
        timeout=settings.page_fetch_timeout_seconds,
        accept="text/html,application/xhtml+xml",
    )


def get_feed_fetcher() -> Fetcher:
    return Fetcher(
        user_agent=settings.feed_user_agent,
        timeout=settings.feed_fetch_timeout_seconds,
    )


def get_settings_repo(db: Session = Depends(get_db)) -> BotSettingsRepository:
    return BotSettingsRepository(db)
