import pytest
from unittest.mock import MagicMock

from models.resolution import Resolution
from services.notification_service import CollectingNotifier, EpisodeOrigin
from utils.errors import FeedError
from utils.subscription_manager import seed_shows, subscribe_and_backfill, resolve_shows


def test_seed_shows_inserts_titles(db_service):
    season = MagicMock()
    season.fetch_current_season_titles.return_value = ["Show A", "Show B"]

    assert seed_shows(db_service, season) == 2
    assert seed_shows(db_service, season) == 0
    assert [show.title for show in db_service.get_shows()] == ["Show A", "Show B"]


def test_seed_shows_dry_run_does_not_write():
    db = MagicMock()
    season = MagicMock()
    season.fetch_current_season_titles.return_value = ["Show A"]

    assert seed_shows(db, season, dry_run=True) == 1
    db.insert_show_titles.assert_not_called()


def test_subscribe_and_backfill_stores_watched(db_service, episode_factory):
    db_service.insert_show_titles(["Show A"])
    show = db_service.get_show_by_title("Show A")
    feed = MagicMock()
    feed.fetch_show_episodes.return_value = [
        episode_factory(episode="1"),
        episode_factory(episode="2"),
        episode_factory(episode="2", resolution=Resolution.FHD),
    ]
    notifier = CollectingNotifier()

    records = subscribe_and_backfill(db_service, feed, show, Resolution.HD, notifier=notifier)

    feed.fetch_show_episodes.assert_called_once_with("Show A")
    assert db_service.get_show_by_id(show.id).subscribed is True
    assert len(records) == 3
    assert all(record.watched for record in records)
    assert db_service.get_new_episodes(Resolution.HD) == []
    assert [event.origin for event in notifier.events] == [EpisodeOrigin.BACKFILL, EpisodeOrigin.BACKFILL]


def test_subscribe_keeps_subscription_when_backfill_fails(db_service):
    db_service.insert_show_titles(["Show A"])
    show = db_service.get_show_by_title("Show A")
    feed = MagicMock()
    feed.fetch_show_episodes.side_effect = FeedError("unreachable")

    with pytest.raises(FeedError):
        subscribe_and_backfill(db_service, feed, show, Resolution.HD)

    assert db_service.get_show_by_id(show.id).subscribed is True


def test_resolve_shows(db_service):
    db_service.insert_show_titles(["Show A", "Show B"])
    shows = resolve_shows(db_service, ["Show B", "show a"])
    assert [show.title for show in shows] == ["Show B", "Show A"]

    with pytest.raises(KeyError):
        resolve_shows(db_service, ["Show C"])
