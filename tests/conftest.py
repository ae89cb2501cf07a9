import os
import sys
import threading
import pytest
import configparser
from pathlib import Path
from unittest.mock import MagicMock
from click.testing import CliRunner

# Add project root to sys.path for local imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from utils.animewatch_config import load_configuration
from services.db_factory import create_db_service
from models.episode import Episode
from models.resolution import Resolution


@pytest.fixture(autouse=True)
def restore_thread_excepthook(monkeypatch):
    """setup_logging() installs a process-wide thread hook; undo it after each test."""
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)


# ────────────────────────────────────────────────
# CONFIGURATION FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def test_config_path(tmp_path):
    """Create a temporary configuration file for AnimeWatch tests."""
    config_path = tmp_path / "test_animewatch_config.ini"
    config = configparser.ConfigParser()

    config["Feed"] = {
        "url": "https://feed.example/rss",
        "search_url": "https://feed.example/rss?q={query}",
        "poll_interval": "60",
        "retry_backoff": "10",
        "timeout": "5",
    }
    config["Season"] = {"url": "https://season.example/current-season/"}
    config["Player"] = {"path": str(tmp_path / "player")}
    config["Preferences"] = {"resolution": "720p"}
    config["Database"] = {"type": "sqlite"}
    config["SQLite"] = {"db_file": str(tmp_path / "data" / "test.db")}

    with config_path.open("w") as config_file:
        config.write(config_file)

    return config_path


@pytest.fixture
def config(test_config_path):
    """Load the configuration from the test config path."""
    return load_configuration(str(test_config_path))


# ────────────────────────────────────────────────
# DATABASE FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def db_service(config):
    """Return a database service initialized with the test database."""
    db = create_db_service(config)
    db.initialize()
    return db


@pytest.fixture
def subscribed_show(db_service):
    """Store two shows and subscribe to the first one."""
    db_service.insert_show_titles(["Show A", "Show B"])
    show = db_service.get_show_by_title("Show A")
    db_service.subscribe_to_show(show.id)
    return db_service.get_show_by_id(show.id)


# ────────────────────────────────────────────────
# HELPERS
# ────────────────────────────────────────────────

def make_episode(title="Show A", episode="1", resolution=Resolution.HD, version="", link=None) -> Episode:
    return Episode(
        title=title,
        episode=episode,
        resolution=resolution,
        version=version,
        torrent_link=link or f"magnet:?xt={title.replace(' ', '')}-{episode}-{resolution}",
    )


@pytest.fixture
def episode_factory():
    return make_episode


@pytest.fixture
def runner():
    """Fixture providing a Click CliRunner instance."""
    return CliRunner()


@pytest.fixture
def mock_obj():
    """Context object with mocked services, as built by the CLI group."""
    return {
        "config": {},
        "config_path": "./config/animewatch_config.ini",
        "db": MagicMock(),
        "feed": MagicMock(),
        "season": MagicMock(),
        "player": MagicMock(),
        "resolution": Resolution.HD,
        "poll_interval": 60,
        "retry_backoff": 10,
        "dry_run": False,
    }


RSS_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Releases</title>
    <link>https://feed.example/</link>
    <description>Latest releases</description>
    {items}
  </channel>
</rss>
"""


def rss_document(*items) -> str:
    """Build an RSS 2.0 document from (title, link) pairs."""
    rendered = "".join(
        f"<item><title>{title}</title><link>{link}</link></item>" for title, link in items
    )
    return RSS_TEMPLATE.format(items=rendered)


@pytest.fixture
def rss_builder():
    return rss_document
