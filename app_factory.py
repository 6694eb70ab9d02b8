"""
Application factory for the product image catalog tools
"""
import os
import logging
from flask import Flask

from config import config
from models import db

def create_app(config_name=None):
    """Create and configure the Flask application"""

    app = Flask(__name__)

    # Determine environment
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    if config_name not in config:
        raise RuntimeError(f"❌ Unknown configuration: {config_name}")

    config_class = config[config_name]
    if config_name == 'production':
        config_class.validate_config()

    app.config.from_object(config_class)

    db.init_app(app)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    app.logger.info(f'Image catalog tools startup ({config_name})')

    if app.config.get('RUN_MIGRATIONS'):
        from database_migrations import run_all_migrations
        with app.app_context():
            run_all_migrations(db, app)

    return app
