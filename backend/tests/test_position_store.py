import datetime as dt
import threading

from crowdsafe.services.position_store import PositionStore

BOX = 0.0005


def test_upsert_overwrites_same_entity(t0):
    store = PositionStore()
    store.upsert("u1", (0.0, 0.0), now=t0)
    store.upsert("u1", (1.0, 1.0), now=t0)
    assert len(store) == 1
    assert store.get("u1").coordinate == (1.0, 1.0)
    assert store.count_near((0.0, 0.0), BOX, BOX, now=t0) == 0
    assert store.count_near((1.0, 1.0), BOX, BOX, now=t0) == 1


def test_count_near_uses_box_bounds(t0):
    store = PositionStore()
    store.upsert("inside", (0.0003, -0.0003), now=t0)
    store.upsert("edge", (0.0005, 0.0), now=t0)
    store.upsert("far", (0.01, 0.01), now=t0)
    assert store.count_near((0.0, 0.0), BOX, BOX, now=t0) == 1


def test_stale_entries_evicted_on_read(t0):
    store = PositionStore()
    store.upsert("old", (0.0, 0.0), now=t0)
    store.upsert("fresh", (0.0, 0.0), now=t0 + dt.timedelta(minutes=4))

    # exactly at the window is still live
    assert store.count_near((0.0, 0.0), BOX, BOX, now=t0 + dt.timedelta(minutes=5)) == 2
    assert len(store) == 2

    assert store.count_near((0.0, 0.0), BOX, BOX, now=t0 + dt.timedelta(minutes=5, seconds=1)) == 1
    assert len(store) == 1
    assert store.get("old") is None


def test_eviction_applies_to_entries_outside_the_box(t0):
    store = PositionStore()
    store.upsert("elsewhere", (10.0, 10.0), now=t0)
    store.count_near((0.0, 0.0), BOX, BOX, now=t0 + dt.timedelta(minutes=6))
    assert len(store) == 0


def test_custom_staleness_window(t0):
    store = PositionStore(staleness_window=dt.timedelta(seconds=30))
    store.upsert("u1", (0.0, 0.0), now=t0)
    assert store.count_near((0.0, 0.0), BOX, BOX, now=t0 + dt.timedelta(seconds=31)) == 0


def test_concurrent_upserts_and_reads(t0):
    store = PositionStore()
    counts = []

    def writer(offset: int):
        for i in range(200):
            store.upsert(f"w{offset}-{i}", (0.0, 0.0), now=t0)

    def reader():
        for _ in range(50):
            counts.append(store.count_near((0.0, 0.0), BOX, BOX, now=t0))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    threads.append(threading.Thread(target=reader))
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.count_near((0.0, 0.0), BOX, BOX, now=t0) == 800
    assert all(0 <= c <= 800 for c in counts)
    assert counts == sorted(counts)
