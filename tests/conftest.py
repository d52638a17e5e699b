from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token
from sqlalchemy import event
from sqlalchemy.engine import Engine

from gymcloud import create_app
from gymcloud.extensions import db
from gymcloud.models import User
from gymcloud.utils.clock import utcnow


@event.listens_for(Engine, "connect")
def enforce_sqlite_foreign_keys(dbapi_connection, connection_record):
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make_user(role="USER", email=None, password="secret123", end_date=None, days_left=30):
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@gym.test",
            name=f"User {counter['n']}",
            role=role,
            status="ACTIVE",
            is_first_login=False,
            created_at=utcnow(),
        )
        if end_date is not None:
            user.subscription_end_date = end_date
        elif role == "USER" and days_left is not None:
            user.subscription_end_date = utcnow() + timedelta(days=days_left)
        else:
            user.subscription_end_date = app.config["STAFF_SUBSCRIPTION_END"]
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def admin(make_user):
    return make_user(role="ADMIN", email="admin@gym.test")


@pytest.fixture
def coach(make_user):
    return make_user(role="COACH", email="coach@gym.test")


@pytest.fixture
def member(make_user):
    return make_user(role="USER", email="member@gym.test")
