"""
Database utility functions and the error types raised at the storage boundary
"""
import logging
from functools import wraps
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ImageCatalogError(Exception):
    """Base class for image catalog errors"""


class StorageUnavailableError(ImageCatalogError):
    """The database could not be reached or rejected a query/update"""


class NotFoundError(ImageCatalogError):
    """An expected record is missing"""


class ValidationError(ImageCatalogError):
    """Malformed input"""


def storage_operation(func):
    """
    Decorator for store methods that talk to the database.

    Rolls back the session and re-raises any SQLAlchemy error as
    StorageUnavailableError. No retries: the caller decides the retry policy.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Database operation {func.__name__} failed: {str(e)}")
            try:
                self.session.rollback()
            except SQLAlchemyError as rollback_error:
                logger.warning(f"Rollback after failed {func.__name__} also failed: {rollback_error}")
            raise StorageUnavailableError(str(e)) from e

    return wrapper

def check_database_connection(db):
    """
    Test database connection and return status
    """
    try:
        db.session.execute(text('SELECT 1'))
        db.session.commit()
        return True, "Database connection successful"
    except SQLAlchemyError as e:
        db.session.rollback()
        return False, f"Database connection failed: {str(e)}"

def require_product_id(product_id):
    """Return product_id as an int or raise ValidationError"""
    if product_id is None or isinstance(product_id, bool):
        raise ValidationError(f"Invalid product id: {product_id!r}")
    try:
        return int(product_id)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid product id: {product_id!r}")
