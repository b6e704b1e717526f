import os
# Ensure the app factory picks the Testing config & SQLite memory DB
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite:///:memory:")

from datetime import datetime, timedelta, timezone

import pytest
from pulse import create_app
from pulse.extensions import db
from pulse.models import User, Creator, Message, Reply, Reaction

NOW = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)

@pytest.fixture(scope="session")
def app():
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI="sqlite:///:memory:",
        APP_BASE_URL="http://example.test",
        WTF_CSRF_ENABLED=False,
        APP_ENV="test",
    )
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture(autouse=True)
def _db_clean(app):
    # Clean BEFORE each test
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()
    yield
    # And AFTER each test (keeps state hermetic even if a test fails mid-transaction)
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()

def login(client, user_id: int):
    # Simulate Flask-Login session
    with client.session_transaction() as sess:
        sess["_user_id"] = str(user_id)

def make_creator(app, company_id="biz_1", slug="acme", email="creator@example.com", with_user=True):
    """Returns (creator_id, user_id|None)."""
    with app.app_context():
        creator = Creator(company_id=company_id, slug=slug, display_name=slug.title())
        db.session.add(creator)
        db.session.commit()
        user_id = None
        if with_user:
            u = User(email=email, company_id=company_id)
            u.set_password("testpass")
            db.session.add(u)
            db.session.commit()
            user_id = u.id
        return creator.id, user_id

def make_message(app, creator_id, text="hello", tag="question", product_category=None,
                 reviewed=False, created_at=None, replies=(), reactions=0):
    """replies: iterable of (text, is_public). reactions: number of distinct visitors."""
    with app.app_context():
        msg = Message(
            creator_id=creator_id,
            message=text,
            tag=tag,
            product_category=product_category,
            reviewed=reviewed,
            created_at=created_at or NOW,
        )
        db.session.add(msg)
        db.session.flush()
        for reply_text, is_public in replies:
            db.session.add(Reply(message_id=msg.id, reply_text=reply_text, is_public=is_public))
        for i in range(reactions):
            db.session.add(Reaction(message_id=msg.id, user_hash=f"visitor-{i}", emoji="🔥"))
        db.session.commit()
        return msg.id

@pytest.fixture()
def creator(app, client):
    """A creator with a logged-in user; yields the creator id."""
    creator_id, user_id = make_creator(app)
    login(client, user_id)
    return creator_id

@pytest.fixture()
def ago():
    return lambda **kw: NOW - timedelta(**kw)

@pytest.fixture()
def csrf_on(app):
    """CSRF checks as they run outside the test config."""
    app.config["WTF_CSRF_ENABLED"] = True
    yield
    app.config["WTF_CSRF_ENABLED"] = False
