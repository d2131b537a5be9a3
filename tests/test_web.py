"""Tests for the web app."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from daybook.adapters.clock import FixedClock
from daybook.adapters.sqlite_store import SQLiteEntryStore
from daybook.core.entries import Entry
from daybook.ports.entry_store import StorageUnavailable
from daybook.views import TemporalView
from daybook.web import create_app

CET = timezone(timedelta(hours=1))
NOW = datetime(2024, 1, 19, 10, 0, tzinfo=CET)


@pytest.fixture
def store(tmp_path):
    s = SQLiteEntryStore(tmp_path / "daybook.sqlite3", clock=FixedClock(NOW))
    s.initialize()
    return s


@pytest.fixture
def client(store):
    view = TemporalView(store, clock=FixedClock(NOW), tz=CET, fallback_title="Der var engang...")
    app = create_app(store, view)
    app.config["TESTING"] = True
    return app.test_client()


class TestIndex:
    def test_fallback_when_nothing_today(self, client):
        response = client.get("/")
        assert response.status_code == 200
        body = response.get_data(as_text=True)
        assert "Fri d. 19. January 2024" in body
        assert "Der var engang..." in body
        assert 'id="save-button"' in body

    def test_shows_today_and_history(self, client, store):
        store.insert(Entry(title="Morning pages", text="Coffee", timestamp=int(NOW.timestamp())))
        store.insert(Entry(title="Thursday draft", timestamp=1705615000))
        store.insert(Entry(title="Thursday final", timestamp=1705615764))

        body = client.get("/").get_data(as_text=True)

        assert "Morning pages" in body
        assert "Coffee" in body
        assert "Thu d. 18. January 2024" in body
        assert "Thursday final" in body
        assert "Thursday draft" not in body
        assert 'id="save-button"' not in body


class TestNewEntry:
    def test_created(self, client, store):
        response = client.post("/new_entry", json={"title": "Hello", "text": "World"})
        assert response.status_code == 201
        assert response.get_data() == b""
        assert store.scan_all() == [Entry(title="Hello", text="World", timestamp=int(NOW.timestamp()))]

    def test_explicit_timestamp(self, client, store):
        response = client.post("/new_entry", json={"title": "Back-dated", "text": "", "timestamp": 1705615764})
        assert response.status_code == 201
        assert store.scan_all()[0].timestamp == 1705615764

    def test_text_defaults_to_empty(self, client, store):
        assert client.post("/new_entry", json={"title": "Only a title"}).status_code == 201
        assert store.scan_all()[0].text == ""

    @pytest.mark.parametrize(
        "payload",
        [
            {"text": "no title"},
            {"title": "", "text": "blank"},
            {"title": "   ", "text": "blank"},
            {"title": 5, "text": "wrong type"},
            {"title": "Hi", "text": ["not", "a", "string"]},
            {"title": "Hi", "timestamp": "yesterday"},
            {"title": "Hi", "timestamp": True},
            ["title", "text"],
        ],
    )
    def test_bad_request(self, client, store, payload):
        response = client.post("/new_entry", json=payload)
        assert response.status_code == 400
        assert store.scan_all() == []

    @pytest.mark.parametrize("timestamp", [10**15, 10**20])
    def test_out_of_range_timestamp(self, client, store, timestamp):
        response = client.post("/new_entry", json={"title": "x", "timestamp": timestamp})
        assert response.status_code == 400
        assert store.scan_all() == []
        assert client.get("/").status_code == 200

    def test_not_json(self, client):
        response = client.post("/new_entry", data="title=Hi", content_type="text/plain")
        assert response.status_code == 400


class TestAssets:
    @pytest.mark.parametrize(
        "path, mimetype",
        [
            ("/style.css", "text/css"),
            ("/script.js", "text/javascript"),
            ("/favicon.svg", "image/svg+xml"),
        ],
    )
    def test_served_with_cache_header(self, client, path, mimetype):
        response = client.get(path)
        assert response.status_code == 200
        assert response.mimetype == mimetype
        assert response.cache_control.max_age == 86400
        response.close()


class TestStorageFailure:
    def test_index_returns_500(self):
        broken = MagicMock()
        broken.scan_all.side_effect = StorageUnavailable("disk gone")
        app = create_app(broken, TemporalView(broken, clock=FixedClock(NOW), tz=CET))

        response = app.test_client().get("/")
        assert response.status_code == 500

    def test_insert_returns_500(self):
        broken = MagicMock()
        broken.insert.side_effect = StorageUnavailable("read-only")
        app = create_app(broken, TemporalView(broken, clock=FixedClock(NOW), tz=CET))

        response = app.test_client().post("/new_entry", json={"title": "Hi"})
        assert response.status_code == 500
