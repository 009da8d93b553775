# provenance/__init__.py
from flask import Flask, jsonify
from flask_cors import CORS
import atexit
import logging
from datetime import datetime, timezone

from provenance.config.settings import get_config
from provenance.config.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(config_overrides: dict = None, store=None, notifier=None, clock=None):
    """
    Application factory pattern

    Args:
        config_overrides: Values applied on top of the environment config
        store: Pre-built state store (tests inject an in-memory one)
        notifier: Notification sink overriding NOTIFICATION_SINKS
        clock: Timestamp source overriding the system clock
    """
    app = Flask(__name__)
    app.config.from_object(get_config())
    if config_overrides:
        app.config.update(config_overrides)

    setup_logging(app.config.get('LOG_LEVEL', 'INFO'))

    CORS(app,
         origins=app.config.get('CORS_ORIGINS'),
         allow_headers=['Content-Type', 'Authorization'],
         methods=['GET', 'POST', 'DELETE', 'OPTIONS'])

    app.extensions['provenance'] = build_registry(app.config, store=store, notifier=notifier, clock=clock)

    from provenance.api.route_registry import register_routes
    from provenance.api.middleware.error_handler import error_handler
    register_routes(app)
    error_handler.init_app(app)
    register_essential_endpoints(app)

    return app


def build_registry(config, store=None, notifier=None, clock=None) -> dict:
    """
    Wire the state store, access control, notifier and registry together

    Returns:
        Dict with 'store', 'access_control', 'registry' and 'notifier'
    """
    from provenance.services.state_store import InMemoryStateStore, MongoStateStore
    from provenance.services.access_control_service import AccessControlService
    from provenance.services.registry_service import ProductRegistryService
    from provenance.services.notification_service import build_notifier

    db = None
    if store is None:
        backend = config.get('STATE_BACKEND', 'memory')
        if backend == 'mongo':
            from provenance.config.database import get_db_connection, close_db_connection
            db = get_db_connection(config.get('MONGODB_URI'), config.get('DATABASE_NAME'))
            atexit.register(close_db_connection)
            store = MongoStateStore(db)
        elif backend == 'memory':
            store = InMemoryStateStore()
        else:
            raise ValueError(f"Unknown STATE_BACKEND: {backend}")
        logger.info(f"Using {backend} state backend")
    elif isinstance(store, MongoStateStore):
        db = store.db

    if notifier is None:
        notifier = build_notifier(config, db)

    access_control = AccessControlService(store)
    admin = config.get('REGISTRY_ADMIN_ADDRESS')
    if admin:
        bootstrap_administrator(access_control, admin)

    registry = ProductRegistryService(store, access_control, notifier=notifier, clock=clock)

    return {
        'store': store,
        'access_control': access_control,
        'registry': registry,
        'notifier': notifier
    }


def bootstrap_administrator(access_control, admin_address):
    """
    Initialize access control with the configured administrator if none exists.

    Several workers may boot against the same store; the one that loses the
    race keeps the administrator already stored.
    """
    from provenance.core.exceptions import AlreadyInitialized
    from provenance.utils.identity import to_identity

    if access_control.get_administrator() is None:
        try:
            return access_control.initialize(admin_address)
        except AlreadyInitialized:
            logger.info("Access control was initialized by another worker")

    current = access_control.get_administrator()
    if current != to_identity(admin_address):
        logger.warning(f"REGISTRY_ADMIN_ADDRESS {admin_address} ignored, administrator is {current}")
    return current


def register_essential_endpoints(app):
    """Register essential endpoints that always work"""

    @app.route('/')
    def home():
        return {
            "message": "Product Provenance Registry API",
            "status": "running",
            "version": "1.0"
        }

    @app.route('/health')
    def health():
        """Simple health check"""
        services = app.extensions['provenance']
        store_ok = services['store'].ping()

        health_data = {
            'status': 'healthy' if store_ok else 'unhealthy',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'checks': {
                'store': {'status': 'healthy' if store_ok else 'unhealthy'},
                'access_control': {
                    'status': 'healthy' if services['access_control'].get_administrator() else 'uninitialized'
                }
            }
        }
        return jsonify(health_data), 200 if store_ok else 503
