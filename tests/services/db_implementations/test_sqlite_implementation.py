import os
import sqlite3
import pytest

from models.resolution import Resolution
from services.db_implementations.sqlite_implementation import SQLiteDBService


def test_initialize_creates_tables(db_service):
    with sqlite3.connect(db_service.db_file) as conn:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {"shows", "episodes"} <= tables


def test_insert_show_titles_ignores_duplicates(db_service):
    assert db_service.insert_show_titles(["Show A", "Show B", " ", "Show A"]) == 2
    assert db_service.insert_show_titles(["Show B", "Show C"]) == 1
    assert [show.title for show in db_service.get_shows()] == ["Show A", "Show B", "Show C"]


def test_get_shows_filters_by_subscription(db_service, subscribed_show):
    assert [s.title for s in db_service.get_shows(subscribed=True)] == ["Show A"]
    assert [s.title for s in db_service.get_shows(subscribed=False)] == ["Show B"]
    assert subscribed_show.subscribed is True


def test_unsubscribe_and_unknown_show(db_service, subscribed_show):
    db_service.unsubscribe_from_show(subscribed_show.id)
    assert db_service.get_show_by_id(subscribed_show.id).subscribed is False
    with pytest.raises(KeyError):
        db_service.subscribe_to_show(9999)


def test_insert_episode_returns_record_once(db_service, subscribed_show, episode_factory):
    episode = episode_factory(episode="3")
    record = db_service.insert_episode(subscribed_show.id, episode, watched=False)
    assert record is not None
    assert record.id >= 1
    assert record.show_id == subscribed_show.id
    assert record.fetched_at is not None

    # Same key, different version and link
    again = episode_factory(episode="3", version="v2", link="magnet:?xt=other")
    assert db_service.insert_episode(subscribed_show.id, again) is None

    stored = db_service.get_episode_by_id(record.id)
    assert stored.torrent_link == episode.torrent_link
    assert stored.watched is False


def test_same_episode_in_other_resolution_is_separate(db_service, subscribed_show, episode_factory):
    assert db_service.insert_episode(subscribed_show.id, episode_factory(resolution=Resolution.HD))
    assert db_service.insert_episode(subscribed_show.id, episode_factory(resolution=Resolution.FHD))
    assert len(db_service.get_episodes_for_show(subscribed_show.id, Resolution.HD)) == 1
    assert len(db_service.get_episodes_for_show(subscribed_show.id, "1080p")) == 1


def test_episodes_for_show_in_episode_order(db_service, subscribed_show, episode_factory):
    for number in ("10", "2", "10.5", "10.25", "1"):
        db_service.insert_episode(subscribed_show.id, episode_factory(episode=number))
    episodes = db_service.get_episodes_for_show(subscribed_show.id, Resolution.HD)
    assert [ep.episode for ep in episodes] == ["1", "2", "10", "10.25", "10.5"]


def test_episodes_hidden_after_unsubscribe(db_service, subscribed_show, episode_factory):
    db_service.insert_episode(subscribed_show.id, episode_factory())
    db_service.unsubscribe_from_show(subscribed_show.id)
    assert db_service.get_episodes_for_show(subscribed_show.id, Resolution.HD) == []
    assert db_service.get_new_episodes(Resolution.HD) == []


def test_new_episodes_and_flag_watched(db_service, subscribed_show, episode_factory):
    show_b = db_service.get_show_by_title("Show B")
    db_service.subscribe_to_show(show_b.id)

    db_service.insert_episode(show_b.id, episode_factory(title="Show B", episode="1"))
    second = db_service.insert_episode(subscribed_show.id, episode_factory(episode="2"))
    db_service.insert_episode(subscribed_show.id, episode_factory(episode="1"))
    db_service.insert_episode(subscribed_show.id, episode_factory(episode="3"), watched=True)
    db_service.insert_episode(subscribed_show.id, episode_factory(episode="4", resolution=Resolution.SD))

    new = db_service.get_new_episodes(Resolution.HD)
    assert [ep.formatted_title() for ep in new] == ["Show A - 1", "Show A - 2", "Show B - 1"]

    assert db_service.flag_episode_as_watched(second.id) is True
    assert db_service.flag_episode_as_watched(second.id) is True
    assert db_service.flag_episode_as_watched(9999) is False
    assert [ep.episode for ep in db_service.get_new_episodes(Resolution.HD) if ep.title == "Show A"] == ["1"]


def test_read_only_refuses_writes(db_service):
    db_service.insert_show_titles(["Show A"])
    ro = SQLiteDBService(db_service.db_file, read_only=True)
    assert ro.is_read_only() is True
    assert [s.title for s in ro.get_shows()] == ["Show A"]
    with pytest.raises(PermissionError):
        ro.insert_show_titles(["Show B"])
    with pytest.raises(PermissionError):
        ro.flag_episode_as_watched(1)


def test_initialize_creates_parent_directory(tmp_path):
    db_file = tmp_path / "nested" / "dir" / "anime.db"
    SQLiteDBService(str(db_file)).initialize()
    assert db_file.exists()


def test_backup_database(db_service):
    backup_path = db_service.backup_database()
    assert os.path.exists(backup_path)
    assert os.path.basename(os.path.dirname(backup_path)) == "backups"


def test_backup_database_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SQLiteDBService(str(tmp_path / "missing.db")).backup_database()
