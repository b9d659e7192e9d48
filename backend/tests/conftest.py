import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from jobbot.database import get_db, init_db
from jobbot.dependencies import get_completion_client, get_feed_fetcher, get_page_fetcher
from jobbot.errors import TransportError
from jobbot.main import app
from jobbot.services.completion import Completion


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class FakeCompletionClient:
    """Returns canned replies in order and remembers every prompt it was sent."""

    model = "claude-sonnet-4-6"

    def __init__(self, *replies, input_tokens=150, output_tokens=80):
        self.replies = list(replies)
        self.input_tokens = input_tokens
        self.output_tokens = output_tokens
        self.prompts = []
        self.max_tokens = []

    def queue(self, *replies):
        self.replies.extend(replies)

    def complete(self, prompt, max_tokens):
        self.prompts.append(prompt)
        self.max_tokens.append(max_tokens)
        if not self.replies:
            raise AssertionError("FakeCompletionClient ran out of replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return Completion(
            text=reply,
            input_tokens=self.input_tokens,
            output_tokens=self.output_tokens,
            model=self.model,
        )


class FakeFetcher:
    """Serves bodies from a dict keyed by URL; Exception values are raised."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.requested = []

    def fetch(self, url):
        self.requested.append(url)
        if url not in self.pages:
            raise TransportError("HTTP 404", upstream_status=404)
        body = self.pages[url]
        if isinstance(body, Exception):
            raise body
        return body


@pytest.fixture
def test_db(tmp_path):
    db_path = tmp_path / "jobbot.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db(test_db):
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def completion():
    fake = FakeCompletionClient()
    app.dependency_overrides[get_completion_client] = lambda: fake
    return fake


@pytest.fixture
def page_fetcher():
    fake = FakeFetcher()
    app.dependency_overrides[get_page_fetcher] = lambda: fake
    return fake


@pytest.fixture
def feed_fetcher():
    fake = FakeFetcher()
    app.dependency_overrides[get_feed_fetcher] = lambda: fake
    return fake


@pytest.fixture
def client(test_db, completion, page_fetcher, feed_fetcher):
    return TestClient(app)
