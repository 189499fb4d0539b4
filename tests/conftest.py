import pytest

from index import create_app
from models.base import db

TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'SECRET_KEY': 'test-secret',
    'RATE_LIMIT_PER_SECOND': 1000.0,
    'RATE_LIMIT_BURST': 1000,
    'LOG_LEVEL': 'WARNING',
    'LOG_JSON': False,
    'AUTO_MIGRATE': False,
}


def build_app(**overrides):
    app = create_app({**TEST_CONFIG, **overrides})
    with app.app_context():
        db.create_all()
    return app


@pytest.fixture
def app():
    app = build_app()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def repository(app):
    with app.app_context():
        yield app.extensions['product_repository']


@pytest.fixture
def seed(app):
    """Insert (name, size, price) tuples and return the new ids in order."""
    def _seed(*rows):
        repo = app.extensions['product_repository']
        with app.app_context():
            return [repo.create(name, size, price).id for name, size, price in rows]
    return _seed
