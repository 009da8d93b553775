import sys

from provenance.config.settings import get_config
from provenance.config.database import get_db_connection
from provenance.core.exceptions import RegistryError
from provenance.services.state_store import MongoStateStore
from provenance.services.access_control_service import AccessControlService


def create_admin(address):
    config = get_config()
    db = get_db_connection(config.MONGODB_URI, config.DATABASE_NAME)
    access_control = AccessControlService(MongoStateStore(db))

    try:
        admin = access_control.initialize(address)
    except RegistryError as e:
        print(f"❌ {e.message}")
        return False

    print(f"✅ Administrator initialized: {admin}")
    return True


if __name__ == '__main__':
    if len(sys.argv) != 2:
        print("Usage: python scripts/create_admin.py <admin-address>")
        sys.exit(2)
    sys.exit(0 if create_admin(sys.argv[1]) else 1)
