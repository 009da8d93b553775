"""
Database Configuration and Connection Management
Centralized database connection with singleton pattern
"""

import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Global connection instances
_db_connection = None
_mongo_client = None


def get_db_connection(uri: str = None, database_name: str = 'product_provenance'):
    """
    Get database connection with connection pooling (singleton pattern)
    Returns the same connection instance across the application

    Args:
        uri: MongoDB connection string, required on first call
        database_name: Database to select

    Returns:
        Database: MongoDB database instance
    """
    global _db_connection, _mongo_client

    if _db_connection is None:
        if not uri:
            raise ValueError("MONGODB_URI is not configured")

        try:
            _mongo_client = MongoClient(
                uri,
                maxPoolSize=50,
                minPoolSize=1,
                maxIdleTimeMS=30000,
                serverSelectionTimeoutMS=30000
            )

            # Test connection
            _mongo_client.admin.command('ping')

            _db_connection = _mongo_client[database_name]
            logger.info(f"Connected to database: {database_name}")

        except ConnectionFailure as e:
            logger.error(f"Database connection failed: {e}")
            _mongo_client = None
            raise

    return _db_connection


def close_db_connection():
    """
    Close database connection and cleanup resources
    Should be called on application shutdown
    """
    global _db_connection, _mongo_client

    if _mongo_client:
        try:
            _mongo_client.close()
            logger.info("Database connection closed")
        except PyMongoError as e:
            logger.error(f"Error closing database connection: {e}")
        finally:
            _db_connection = None
            _mongo_client = None
