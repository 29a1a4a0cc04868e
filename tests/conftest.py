"""
Shared pytest fixtures for the portal test suite.

Every test gets a fresh app bound to an in-memory SQLite database with one
admin and one technician row.
"""
import pytest

from portal import create_app
from portal.models import db, Technician

ADMIN_EMAIL = 'admin@example.com'
TECH_EMAIL = 'tech@example.com'


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'SECRET_KEY': 'test',
        'NAV_LEGACY_ROLE_FALLBACK': False,
    })
    with app.app_context():
        db.create_all()
        db.session.add_all([
            Technician(email=ADMIN_EMAIL, name='Office Admin', role='admin'),
            Technician(email=TECH_EMAIL, name='Field Tech', role='technician', technician_code='T01'),
        ])
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, **user):
    with client.session_transaction() as sess:
        sess['user'] = user


@pytest.fixture
def admin_client(client):
    _login(client, email=ADMIN_EMAIL, name='Office Admin', user_type='admin')
    return client


@pytest.fixture
def tech_client(client):
    _login(client, email=TECH_EMAIL, name='Field Tech', user_type='technician')
    return client
