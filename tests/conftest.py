import pytest
from fastapi.testclient import TestClient

from family_registry.core.config import Settings
from family_registry.main import create_app
from family_registry.models.credential import CredentialRole
from family_registry.models.member import Member
from family_registry.services.credential_service import create_credential
from family_registry.services.security import create_access_token


def _make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        DATABASE_URL=f"sqlite:///{tmp_path / 'registry.db'}",
        BCRYPT_ROUNDS=4,
        SECRET_KEY="test-secret",
        ADMIN_USERNAME=None,
        ADMIN_PASSWORD=None,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory(tmp_path):
    """Settings on a fresh database file; keyword overrides win."""
    return lambda **overrides: _make_settings(tmp_path, **overrides)


@pytest.fixture
def test_settings(settings_factory):
    return settings_factory()


@pytest.fixture
def app(test_settings):
    app = create_app(test_settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def session_factory(app):
    return app.state.session_factory


@pytest.fixture
def db(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def add_members(db):
    """Insert members from canonical dicts and commit."""
    def _add(*rows):
        members = [Member(**row) for row in rows]
        db.add_all(members)
        db.commit()
        return members
    return _add


@pytest.fixture
def auth_headers(test_settings):
    def _bearer(credential) -> dict:
        token = create_access_token(credential.id, settings=test_settings, role=credential.role.value)
        return {"Authorization": f"Bearer {token}"}
    return _bearer


@pytest.fixture
def admin(db, test_settings):
    return create_credential(db, settings=test_settings, username="admin", password="admin-pass",
                             role=CredentialRole.ADMIN)


@pytest.fixture
def admin_headers(admin, auth_headers):
    return auth_headers(admin)
