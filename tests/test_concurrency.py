"""Concurrent requests against a file-backed SQLite database."""

import threading

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from globetrekker.core.database import build_engine
from globetrekker.main import create_app
from globetrekker.models import Subscriber, User

from conftest import FakeMailer


class SlowMailer(FakeMailer):
    """Blocks inside ``send`` until the test releases it."""

    def __init__(self):
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def send(self, sender, to, subject, html, reply_to=None):
        self.entered.set()
        assert self.release.wait(timeout=10)
        super().send(sender, to, subject, html, reply_to)


@pytest.fixture
def file_engine(tmp_path):
    eng = build_engine(f"sqlite:///{(tmp_path / 'gt.db').as_posix()}")
    yield eng
    eng.dispose()


def _fire_together(client, path, body, n=2):
    barrier = threading.Barrier(n)
    statuses = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        r = client.post(path, json=body)
        with lock:
            statuses.append(r.status_code)

    threads = [threading.Thread(target=worker) for _ in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    return sorted(statuses)


def _count(engine, model):
    with Session(engine) as s:
        return s.execute(select(func.count()).select_from(model)).scalar_one()


def test_identical_signups_one_wins(settings, file_engine):
    app = create_app(settings=settings, mailer=FakeMailer(), engine=file_engine)
    body = {"username": "alice", "email": "a@x.com", "password": "pw"}

    with TestClient(app) as c:
        statuses = _fire_together(c, "/signup", body)

    assert statuses == [200, 409]
    assert _count(file_engine, User) == 1


def test_identical_subscribes_one_wins(settings, file_engine):
    mailer = FakeMailer()
    app = create_app(settings=settings, mailer=mailer, engine=file_engine)

    with TestClient(app) as c:
        statuses = _fire_together(c, "/subscribe", {"email": "ana@example.com"})

    assert statuses == [200, 409]
    assert _count(file_engine, Subscriber) == 1
    assert len(mailer.sent) == 1


def test_slow_welcome_mail_does_not_lock_other_writes(settings, file_engine):
    mailer = SlowMailer()
    app = create_app(settings=settings, mailer=mailer, engine=file_engine)
    result = {}

    with TestClient(app) as c:
        t = threading.Thread(
            target=lambda: result.setdefault("subscribe", c.post("/subscribe", json={"email": "ana@example.com"}))
        )
        t.start()
        try:
            assert mailer.entered.wait(timeout=10)
            # welcome mail still in flight
            r = c.post("/signup", json={"username": "bob", "email": "b@x.com", "password": "pw"})
            assert r.status_code == 200
            r = c.post("/subscribe", json={"email": "ana@example.com"})
            assert r.status_code == 409
        finally:
            mailer.release.set()
            t.join(timeout=30)

    assert result["subscribe"].status_code == 200
    assert _count(file_engine, User) == 1
    assert _count(file_engine, Subscriber) == 1
