"""
Configuration settings for the product image catalog tools
"""
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Base configuration class"""

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv('DB_URL')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
    }

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Run legacy column migrations when the app is created
    RUN_MIGRATIONS = os.getenv('RUN_MIGRATIONS', 'true').lower() == 'true'

    @staticmethod
    def validate_config():
        """Validate that required environment variables are set"""
        required_vars = [
            'DB_URL',
        ]

        missing_vars = []
        for var in required_vars:
            if not os.getenv(var):
                missing_vars.append(var)

        if missing_vars:
            raise RuntimeError(
                f"❌ Missing required environment variables: {', '.join(missing_vars)}\n"
                f"Please set these in your .env file or environment."
            )

class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True

    # Fallback database for development
    SQLALCHEMY_DATABASE_URI = os.getenv('DB_URL') or os.getenv('DB_URL_FALLBACK', 'sqlite:///catalog_local.db')

class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    # The hosted MySQL backend drops idle connections; a repair run is one
    # connection doing short queries, so only recycling and a connect timeout matter
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
        'connect_args': {
            'connect_timeout': int(os.getenv('DB_CONNECT_TIMEOUT', '30')),
        }
    }

class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RUN_MIGRATIONS = False

# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
