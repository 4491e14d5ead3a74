"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from globetrekker.core.config import Settings
from globetrekker.core.database import build_engine
from globetrekker.core.errors import DispatchError
from globetrekker.main import create_app
from globetrekker.services.mailer import Mailer


class FakeMailer(Mailer):
    """Records every send; raises DispatchError while ``fail`` is set."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, sender, to, subject, html, reply_to=None):
        if self.fail:
            raise DispatchError("provider outage")
        self.sent.append(
            {"from": sender, "to": to, "subject": subject, "html": html, "reply_to": reply_to}
        )


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        email_user="bot@globetrekker.test",
        email_pass="secret",
        admin_email="admin@globetrekker.test",
        # keep hashing fast in tests
        bcrypt_rounds=4,
    )


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def engine(settings):
    eng = build_engine(settings.database_url)
    yield eng
    eng.dispose()


@pytest.fixture
def app(settings, mailer, engine):
    return create_app(settings=settings, mailer=mailer, engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
