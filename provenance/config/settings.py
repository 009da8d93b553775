import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration"""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY') or os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    JWT_ALGORITHM = 'HS256'

    # Registry
    REGISTRY_ADMIN_ADDRESS = os.getenv('REGISTRY_ADMIN_ADDRESS')
    STATE_BACKEND = os.getenv('STATE_BACKEND', 'memory')

    # Database
    MONGODB_URI = os.getenv('MONGODB_URI')
    DATABASE_NAME = os.getenv('DATABASE_NAME', 'product_provenance')

    # Notifications
    NOTIFICATION_SINKS = os.getenv('NOTIFICATION_SINKS', 'log')
    WEBHOOK_URL = os.getenv('WEBHOOK_URL')
    WEBHOOK_SECRET = os.getenv('WEBHOOK_SECRET')
    WEBHOOK_TIMEOUT = int(os.getenv('WEBHOOK_TIMEOUT', '30'))
    WEBHOOK_RETRIES = int(os.getenv('WEBHOOK_RETRIES', '3'))

    # API Settings
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:3000,http://localhost:5173').split(',')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    STATE_BACKEND = os.getenv('STATE_BACKEND', 'mongo')


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    DEBUG = True
    STATE_BACKEND = 'memory'
    NOTIFICATION_SINKS = ''
    JWT_SECRET_KEY = 'testing-secret'
    REGISTRY_ADMIN_ADDRESS = None


def get_config(env: str = None):
    """Get configuration class based on FLASK_ENV environment variable"""
    env = (env or os.getenv('FLASK_ENV', 'development')).lower()

    config_map = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'testing': TestingConfig
    }

    return config_map.get(env, DevelopmentConfig)
