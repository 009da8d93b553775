# tests/conftest.py
import pytest
from eth_account import Account

from provenance import create_app
from provenance.services.state_store import InMemoryStateStore
from provenance.services.access_control_service import AccessControlService
from provenance.services.registry_service import ProductRegistryService
from provenance.services.notification_service import NotificationSink
from provenance.utils.date_helpers import FixedClock
from provenance.utils.token_utils import generate_token

JWT_SECRET = 'testing-secret'


class RecordingSink(NotificationSink):
    """Collects published notifications in order"""

    def __init__(self):
        self.notifications = []

    def publish(self, notification):
        self.notifications.append(notification)


def new_address():
    return Account.create().address


@pytest.fixture
def admin():
    return new_address()


@pytest.fixture
def manufacturer():
    return new_address()


@pytest.fixture
def verifier():
    return new_address()


@pytest.fixture
def alice():
    return new_address()


@pytest.fixture
def bob():
    return new_address()


@pytest.fixture
def clock():
    return FixedClock(1_700_000_000)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def store():
    return InMemoryStateStore()


@pytest.fixture
def access_control(store, admin, manufacturer, verifier):
    """Access control bootstrapped with one extra manufacturer and verifier"""
    service = AccessControlService(store)
    service.initialize(admin)
    service.grant_manufacturer(manufacturer, caller=admin)
    service.grant_verifier(verifier, caller=admin)
    return service


@pytest.fixture
def registry(store, access_control, sink, clock):
    return ProductRegistryService(store, access_control, notifier=sink, clock=clock)


@pytest.fixture
def app(store, sink, clock, admin):
    """Create test app wired to the in-memory store"""
    app = create_app(
        config_overrides={
            'TESTING': True,
            'JWT_SECRET_KEY': JWT_SECRET,
            'REGISTRY_ADMIN_ADDRESS': admin,
            'NOTIFICATION_SINKS': ''
        },
        store=store,
        notifier=sink,
        clock=clock
    )
    yield app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def auth_headers():
    """Build authorization headers for an account address"""
    def _headers(address):
        return {'Authorization': f'Bearer {generate_token(address, JWT_SECRET)}'}
    return _headers
