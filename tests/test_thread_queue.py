import threading

from vrdesk.thread_queue import ThreadSafeQueue


def test_try_pop_on_empty_returns_none():
    q = ThreadSafeQueue()
    assert q.try_pop() is None
    assert q.empty()


def test_fifo_order():
    q = ThreadSafeQueue()
    for item in ["a", "b", "c"]:
        q.push(item)
    assert [q.try_pop(), q.try_pop(), q.try_pop()] == ["a", "b", "c"]
    assert q.try_pop() is None


def test_len_tracks_pushes_and_pops():
    q = ThreadSafeQueue()
    q.push(1)
    q.push(2)
    assert len(q) == 2
    assert not q.empty()
    q.try_pop()
    assert len(q) == 1


def test_wait_and_pop_receives_item_from_other_thread():
    q = ThreadSafeQueue()
    results = []

    def consumer():
        results.append(q.wait_and_pop())

    worker = threading.Thread(target=consumer)
    worker.start()
    q.push("frame")
    worker.join(timeout=5)
    assert not worker.is_alive()
    assert results == ["frame"]
    assert q.empty()


def test_concurrent_producers_deliver_every_item():
    q = ThreadSafeQueue()

    def produce(start):
        for value in range(start, start + 100):
            q.push(value)

    threads = [threading.Thread(target=produce, args=(n * 100,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    drained = []
    while (item := q.try_pop()) is not None:
        drained.append(item)
    assert sorted(drained) == list(range(400))