import threading
from collections import Counter
from unittest.mock import MagicMock

from models.resolution import Resolution
from services.notification_service import CollectingNotifier, EpisodeOrigin
from utils.reconciler import reconcile_episodes


def test_reconcile_stores_only_subscribed_shows(db_service, subscribed_show, episode_factory):
    episodes = [episode_factory(episode="1"), episode_factory(title="Show B", episode="1")]

    records = reconcile_episodes(db_service, episodes, watched=False, preferred_resolution=Resolution.HD)

    assert [record.title for record in records] == ["Show A"]
    show_b = db_service.get_show_by_title("Show B")
    db_service.subscribe_to_show(show_b.id)
    assert db_service.get_episodes_for_show(show_b.id, Resolution.HD) == []


def test_reconcile_twice_is_idempotent(db_service, subscribed_show, episode_factory):
    episodes = [episode_factory(episode="1"), episode_factory(episode="2")]
    notifier = CollectingNotifier()

    first = reconcile_episodes(db_service, episodes, False, Resolution.HD, notifier=notifier)
    second = reconcile_episodes(db_service, episodes, False, Resolution.HD, notifier=notifier)

    assert len(first) == 2
    assert second == []
    assert len(notifier.events) == 2
    assert len(db_service.get_episodes_for_show(subscribed_show.id, Resolution.HD)) == 2


def test_reconcile_notifies_only_preferred_resolution(db_service, subscribed_show, episode_factory):
    episodes = [
        episode_factory(episode="1", resolution=Resolution.SD),
        episode_factory(episode="1", resolution=Resolution.HD),
        episode_factory(episode="1", resolution=Resolution.FHD),
    ]
    notifier = CollectingNotifier()

    records = reconcile_episodes(db_service, episodes, True, "720p", origin=EpisodeOrigin.BACKFILL, notifier=notifier)

    assert len(records) == 3
    assert all(record.watched for record in records)
    assert [str(event) for event in notifier.events] == ["[EPISODE ADDED: Show A - 1]"]


def test_reconcile_duplicate_keys_in_one_batch(db_service, subscribed_show, episode_factory):
    episodes = [episode_factory(episode="4"), episode_factory(episode="4", version="v2", link="magnet:?xt=v2")]
    notifier = CollectingNotifier()

    records = reconcile_episodes(db_service, episodes, False, Resolution.HD, notifier=notifier)

    assert len(records) == 1
    assert len(notifier.events) == 1


def test_reconcile_without_subscriptions(db_service, episode_factory):
    db_service.insert_show_titles(["Show A"])
    notifier = MagicMock()
    assert reconcile_episodes(db_service, [episode_factory()], False, Resolution.HD, notifier=notifier) == []
    notifier.notify.assert_not_called()


def test_concurrent_feed_and_backfill_store_each_key_once(db_service, subscribed_show, episode_factory):
    episodes = [
        episode_factory(episode=str(number), resolution=resolution)
        for number in range(1, 14)
        for resolution in Resolution
    ]
    notifier = CollectingNotifier()
    barrier = threading.Barrier(4)
    inserted = []
    errors = []

    def worker(index):
        watched = index % 2 == 0
        origin = EpisodeOrigin.BACKFILL if watched else EpisodeOrigin.FEED
        batch = episodes if index < 2 else list(reversed(episodes))
        barrier.wait()
        try:
            inserted.extend(reconcile_episodes(db_service, batch, watched, Resolution.HD, origin=origin, notifier=notifier))
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert errors == []
    assert len(inserted) == len(episodes)
    assert Counter(record.key for record in inserted) == Counter(ep.key for ep in episodes)

    notified = Counter(event.episode.key for event in notifier.events)
    assert len(notified) == 13
    assert set(notified.values()) == {1}

    stored = sum(len(db_service.get_episodes_for_show(subscribed_show.id, r)) for r in Resolution)
    assert stored == len(episodes)
