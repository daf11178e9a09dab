import pytest
from flask import Flask
from sqlalchemy import create_engine
from sqlalchemy.orm import Session


@pytest.fixture()
def app():
    from automark import load
    from automark.extensions import db

    app = Flask(__name__)
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI="sqlite:///:memory:",
        AUTOMARK_AUTOMARKER_SECRET="test-secret",
    )
    load(app)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store(app):
    from automark.extensions import db
    from automark.store import SQLAlchemyRecordStore

    with app.app_context():
        yield SQLAlchemyRecordStore(db.session, autocommit=True)


@pytest.fixture()
def plugin(store):
    from automark import get_plugin

    return get_plugin(7, store)


@pytest.fixture()
def destination_store():
    """A second, empty database standing in for the site a backup is restored into."""
    from automark.models import AutomarkEntry
    from automark.store import SQLAlchemyRecordStore

    engine = create_engine("sqlite://")
    AutomarkEntry.__table__.create(engine)
    session = Session(engine)
    yield SQLAlchemyRecordStore(session, autocommit=True)
    session.close()
    engine.dispose()
