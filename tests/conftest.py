import os

os.environ["DB_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"

from datetime import datetime

import pytest
import pytz

from app import app as flask_app
from extensions import db
from accounts.models import User
from accounts.tokens import issue_token
from events.models import Event


# Requests push their own app context: Flask-Login caches the caller on g,
# so nothing here may keep a context pushed while the client runs.
@pytest.fixture
def app():
    flask_app.config.update(TESTING=True, CALENDAR_STRICT_OVERLAP=False)
    with flask_app.app_context():
        db.create_all()
    yield flask_app
    with flask_app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(app, email, **kwargs):
    with app.app_context():
        user = User(email=email, **kwargs)
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture
def user_id(app):
    return _make_user(app, "u1@example.com")


@pytest.fixture
def other_user_id(app):
    return _make_user(app, "u2@example.com")


@pytest.fixture
def inactive_user_id(app):
    return _make_user(app, "gone@example.com", is_active=False)


@pytest.fixture
def auth(app):
    def headers(uid):
        with app.app_context():
            token = issue_token(User(id=uid))
        return {"Authorization": f"Bearer {token}"}

    return headers


def _utc(ms):
    return datetime.fromtimestamp(ms / 1000, tz=pytz.utc).replace(tzinfo=None)


@pytest.fixture
def make_event(app):
    def factory(name, start_ms, end_ms, topic="General", starred_by=None):
        with app.app_context():
            event = Event(name=name, topic_name=topic, start_date=_utc(start_ms), end_date=_utc(end_ms))
            db.session.add(event)
            if starred_by is not None:
                user = db.session.get(User, starred_by)
                user.starred_events.append(event)
            db.session.commit()
            return event.id

    return factory


@pytest.fixture
def fetch(app):
    """Load a row by primary key outside any request; returns None once deleted."""

    def loader(model, pk):
        with app.app_context():
            row = db.session.get(model, pk)
            if row is not None:
                db.session.expunge(row)
            return row

    return loader
