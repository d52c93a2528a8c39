import pytest
import redis

from pdfchat import config, worker


class FakeRedis:
    def __init__(self, error=None):
        self.error = error
        self.pings = 0

    def ping(self):
        self.pings += 1
        if self.error:
            raise self.error
        return True


class FakeWorker:
    started = []

    def __init__(self, queues, connection):
        self.queues = queues
        self.connection = connection

    def work(self):
        FakeWorker.started.append(self)
        raise KeyboardInterrupt


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(config, "configure_logging", lambda level=None: None)


def test_unreachable_redis_exits_with_error(monkeypatch):
    conn = FakeRedis(error=redis.ConnectionError("Connection refused"))
    monkeypatch.setattr(worker, "get_redis", lambda: conn)
    monkeypatch.setattr(worker, "Worker", FakeWorker)
    FakeWorker.started = []

    assert worker.main() == 1
    assert conn.pings == 1
    assert FakeWorker.started == []


def test_keyboard_interrupt_stops_cleanly(monkeypatch):
    conn = FakeRedis()
    queue = object()
    monkeypatch.setattr(worker, "get_redis", lambda: conn)
    monkeypatch.setattr(worker, "get_queue", lambda connection=None: queue)
    monkeypatch.setattr(worker, "Worker", FakeWorker)
    FakeWorker.started = []

    assert worker.main() == 0
    [started] = FakeWorker.started
    assert started.queues == [queue]
    assert started.connection is conn
