import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from apps.network.registry import registry
from apps.repositories.logic import create_repository
from apps.users.keys import generate_keypair

User = get_user_model()

DEFAULT_PASSWORD = 'correct-horse-battery'


@pytest.fixture(scope="session")
def keypair():
    """One key pair shared by all fixture users; generation is the slow part of user creation."""
    return generate_keypair()


@pytest.fixture(scope="session")
def storage_root(tmp_path_factory):
    return tmp_path_factory.mktemp('gitmesh-repos')


@pytest.fixture(autouse=True)
def repository_storage(settings, storage_root):
    """Points REPOSITORY_STORAGE_ROOT at the session's temporary directory."""
    settings.REPOSITORY_STORAGE_ROOT = storage_root
    return storage_root


@pytest.fixture(autouse=True)
def clean_registry():
    """The relay registry is process-wide; start every test with it empty."""
    registry.clear()
    yield
    registry.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db, keypair):
    def _make_user(username, password=DEFAULT_PASSWORD, **extra):
        public_key, private_key = keypair
        extra.setdefault('display_name', username.title())
        return User.objects.create_user(
            username=username,
            password=password,
            public_key=public_key,
            private_key=private_key,
            **extra,
        )
    return _make_user


@pytest.fixture
def owner(make_user):
    return make_user('owner')


@pytest.fixture
def other_user(make_user):
    return make_user('intruder')


@pytest.fixture
def client_for():
    """Returns an APIClient logged in (via the session cookie) as the given user."""
    def _client_for(user):
        client = APIClient()
        client.force_login(user)
        return client
    return _client_for


@pytest.fixture
def public_repository(owner):
    return create_repository(owner, name='mesh-core', description='Peer relay core', language='Python')


@pytest.fixture
def private_repository(owner):
    return create_repository(owner, name='secret-keys', description='Not for everyone', is_public=False)
