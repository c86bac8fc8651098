import os
import sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from models import db
from app.version import API_PREFIX

SHOPPER_PHONE = '+919876543210'


@pytest.fixture(scope='session')
def app_instance():
    os.environ.setdefault('APP_ENV', 'testing')
    os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
    from app import create_app
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app


@pytest.fixture(autouse=True)
def _reset_rate_limits(app_instance):
    import extensions
    extensions.limiter.reset()
    yield


@pytest.fixture(scope='function')
def app(app_instance):
    from app.services.catalog import seed_catalog
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        seed_catalog()
        db.session.commit()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


def login(client, phone=SHOPPER_PHONE, **extra):
    payload = {'phone': phone}
    payload.update(extra)
    resp = client.post('/__auth/login_stub', json=payload)
    assert resp.status_code == 200
    return {'Authorization': f"Bearer {resp.get_json()['data']['access']}"}


@pytest.fixture()
def auth_headers(client):
    return login(client)


def shopper_url(path):
    return f"{API_PREFIX}/shopper{path}"
