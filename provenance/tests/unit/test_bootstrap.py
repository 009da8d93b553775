# tests/unit/test_bootstrap.py
import atexit
import logging
from unittest.mock import MagicMock

import pytest

from provenance import build_registry
from provenance.config import database
from provenance.config.database import close_db_connection
from provenance.services.state_store import InMemoryStateStore, MongoStateStore

CONFIG = {'NOTIFICATION_SINKS': ''}


class RacedStore(InMemoryStateStore):
    """Another worker initializes the store right after the first administrator lookup"""

    def __init__(self, winner):
        super().__init__()
        self.winner = winner
        self.lookups = 0

    def get_administrator(self):
        self.lookups += 1
        if self.lookups == 1:
            return None
        if self._administrator is None:
            self.set_administrator(self.winner)
        return super().get_administrator()


def test_configured_admin_is_initialized(admin):
    services = build_registry({**CONFIG, 'REGISTRY_ADMIN_ADDRESS': admin.lower()})

    access_control = services['access_control']
    assert access_control.get_administrator() == admin
    assert access_control.is_manufacturer(admin)
    assert access_control.is_verifier(admin)


def test_no_configured_admin_leaves_registry_uninitialized():
    services = build_registry(CONFIG)
    assert services['access_control'].get_administrator() is None


def test_losing_the_bootstrap_race_does_not_fail_startup(admin, caplog):
    store = RacedStore(admin)

    services = build_registry({**CONFIG, 'REGISTRY_ADMIN_ADDRESS': admin}, store=store)

    assert services['access_control'].get_administrator() == admin
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_race_won_by_other_admin_warns(admin, alice, caplog):
    store = RacedStore(alice)

    services = build_registry({**CONFIG, 'REGISTRY_ADMIN_ADDRESS': admin}, store=store)

    assert services['access_control'].get_administrator() == alice
    assert not services['access_control'].is_manufacturer(admin)
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert alice in warnings[0].getMessage()


def test_existing_admin_mismatch_warns(admin, alice, caplog):
    store = InMemoryStateStore()
    store.set_administrator(alice)

    services = build_registry({**CONFIG, 'REGISTRY_ADMIN_ADDRESS': admin}, store=store)

    assert services['access_control'].get_administrator() == alice
    assert any('REGISTRY_ADMIN_ADDRESS' in r.getMessage() for r in caplog.records
               if r.levelno == logging.WARNING)


def test_mongo_backend_closes_connection_at_exit(monkeypatch):
    registered = []
    monkeypatch.setattr(database, 'get_db_connection', lambda uri, name: MagicMock())
    monkeypatch.setattr(atexit, 'register', registered.append)

    services = build_registry({
        **CONFIG,
        'STATE_BACKEND': 'mongo',
        'MONGODB_URI': 'mongodb://localhost:27017',
        'DATABASE_NAME': 'provenance_test'
    })

    assert isinstance(services['store'], MongoStateStore)
    assert registered == [close_db_connection]


def test_memory_backend_registers_no_exit_hook(monkeypatch):
    registered = []
    monkeypatch.setattr(atexit, 'register', registered.append)

    build_registry({**CONFIG, 'STATE_BACKEND': 'memory'})

    assert registered == []


def test_unknown_backend_rejected():
    with pytest.raises(ValueError):
        build_registry({**CONFIG, 'STATE_BACKEND': 'sqlite'})
