import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from jobbot.config import settings


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- COMPANIES
-- ============================================================
CREATE TABLE IF NOT EXISTS companies (
    id         TEXT PRIMARY KEY,
    name       TEXT NOT NULL UNIQUE COLLATE NOCASE,
    website    TEXT,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

-- ============================================================
-- JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS jobs (
    id               TEXT PRIMARY KEY,
    title            TEXT NOT NULL,
    company          TEXT NOT NULL,
    company_id       TEXT REFERENCES companies(id) ON DELETE SET NULL,
    location         TEXT,
    remote           INTEGER NOT NULL DEFAULT 0,
    url              TEXT NOT NULL UNIQUE,
    description      TEXT,
    requirements     TEXT,
    salary_min       INTEGER,
    salary_max       INTEGER,
    source           TEXT NOT NULL DEFAULT 'manual'
                     CHECK(source IN ('manual','rss','url_import')),
    status           TEXT NOT NULL DEFAULT 'discovered'
                     CHECK(status IN ('discovered','queued','applied','skipped')),
    match_quality    TEXT CHECK(match_quality IN ('perfect','wider_net','no_match')),
    match_confidence INTEGER CHECK(match_confidence BETWEEN 0 AND 100),
    match_reasoning  TEXT,
    fingerprint      TEXT,
    discovered_date  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_jobs_status ON jobs(status);
CREATE INDEX IF NOT EXISTS idx_jobs_match_quality ON jobs(match_quality);
CREATE INDEX IF NOT EXISTS idx_jobs_discovered ON jobs(discovered_date);

-- ============================================================
-- COVER LETTERS
-- ============================================================
CREATE TABLE IF NOT EXISTS cover_letters (
    id                  TEXT PRIMARY KEY,
    job_id              TEXT NOT NULL REFERENCES jobs(id) ON DELETE CASCADE,
    content             TEXT NOT NULL,
    template_used       TEXT,
    customization_notes TEXT,
    created_at          TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_cover_letters_job ON cover_letters(job_id);

-- ============================================================
-- APPLICATIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS applications (
    id                TEXT PRIMARY KEY,
    job_id            TEXT NOT NULL REFERENCES jobs(id) ON DELETE CASCADE,
    cover_letter_id   TEXT REFERENCES cover_letters(id) ON DELETE SET NULL,
    status            TEXT NOT NULL DEFAULT 'pending'
                      CHECK(status IN ('pending','processing','submitted','failed','manual_review')),
    application_type  TEXT NOT NULL DEFAULT 'manual'
                      CHECK(application_type IN ('automated','ad_hoc','manual')),
    submission_method TEXT,
    failure_reason    TEXT,
    retry_count       INTEGER NOT NULL DEFAULT 0,
    user_rating       INTEGER CHECK(user_rating BETWEEN 1 AND 5),
    user_notes        TEXT,
    application_date  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_applications_job ON applications(job_id);
CREATE INDEX IF NOT EXISTS idx_applications_status ON applications(status);
CREATE INDEX IF NOT EXISTS idx_applications_date ON applications(application_date);

-- ============================================================
-- BOT SETTINGS
-- ============================================================
CREATE TABLE IF NOT EXISTS bot_settings (
    setting_key   TEXT PRIMARY KEY,
    setting_value TEXT,
    updated_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

-- ============================================================
-- AI USAGE LOGS (append-only)
-- ============================================================
CREATE TABLE IF NOT EXISTS ai_usage_logs (
    id             TEXT PRIMARY KEY,
    job_id         TEXT REFERENCES jobs(id) ON DELETE SET NULL,
    application_id TEXT REFERENCES applications(id) ON DELETE SET NULL,
    operation      TEXT NOT NULL,
    model          TEXT NOT NULL,
    input_tokens   INTEGER NOT NULL,
    output_tokens  INTEGER NOT NULL,
    cost           REAL NOT NULL,
    created_at     TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_usage_operation ON ai_usage_logs(operation);
CREATE INDEX IF NOT EXISTS idx_usage_job ON ai_usage_logs(job_id);
"""


MIGRATIONS: list[str] = []


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    # Run migrations idempotently (ALTER TABLE fails if column exists)
    for migration in MIGRATIONS:
        try:
            conn.execute(migration)
            conn.commit()
        except sqlite3.OperationalError:
            pass  # already applied
    conn.close()
