from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / ".jobbot"
    api_prefix: str = "/api"
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Empty means the anthropic SDK falls back to ANTHROPIC_API_KEY.
    anthropic_api_key: str = ""
    model: str = "claude-sonnet-4-6"
    scoring_max_tokens: int = 1024
    cover_letter_max_tokens: int = 1024
    url_import_max_tokens: int = 2048
    feed_max_tokens: int = 4096

    page_fetch_timeout_seconds: float = 15.0
    feed_fetch_timeout_seconds: float = 12.0
    page_user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    feed_user_agent: str = "Mozilla/5.0 job-bot RSS reader"

    max_page_chars: int = 12_000
    max_feed_chars: int = 20_000
    # Below this the site most likely blocked the scrape.
    min_page_chars: int = 200
    analyze_batch_size: int = 10

    log_level: str = "INFO"
    log_format: str = "text"  # text | json

    @property
    def db_path(self) -> Path:
        return self.data_dir / "jobbot.sqlite"

    model_config = {"env_prefix": "JOBBOT_"}


settings = Settings()
