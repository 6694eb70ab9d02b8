"""
Schema migrations for the product_images table that run on app startup.
Older uploads stored the image order under image_order or sort_order; these
are folded into display_order once, here, so nothing else reads the aliases.
"""

import logging
from sqlalchemy import text, inspect
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

ORDER_COLUMN = 'display_order'
LEGACY_ORDER_COLUMNS = ('image_order', 'sort_order')


def _image_columns(db):
    inspector = inspect(db.engine)
    if not inspector.has_table('product_images'):
        return None
    return [col['name'] for col in inspector.get_columns('product_images')]


def ensure_product_images_order_column(db):
    """
    Ensure product_images has display_order and backfill it from legacy
    order columns where it is still null.
    """
    try:
        columns = _image_columns(db)
        if columns is None:
            logger.debug("product_images table does not exist yet - skipping")
            return False

        fixed = False

        if ORDER_COLUMN not in columns:
            logger.warning(f"⚠️  Missing '{ORDER_COLUMN}' column in product_images table - FIXING...")
            db.session.execute(text(f"""
                ALTER TABLE product_images
                ADD COLUMN {ORDER_COLUMN} INTEGER NULL
            """))
            fixed = True
            logger.info(f"✅ Added '{ORDER_COLUMN}' column to product_images table")

        aliases = [col for col in LEGACY_ORDER_COLUMNS if col in columns]
        if aliases:
            if len(aliases) == 1:
                source = aliases[0]
            else:
                source = f"COALESCE({', '.join(aliases)})"
            result = db.session.execute(text(f"""
                UPDATE product_images
                SET {ORDER_COLUMN} = {source}
                WHERE {ORDER_COLUMN} IS NULL AND {source} IS NOT NULL
            """))
            if result.rowcount:
                fixed = True
                logger.info(f"✅ Copied {result.rowcount} legacy order value(s) from {', '.join(aliases)}")

        if fixed:
            db.session.commit()
        else:
            logger.debug(f"✓ product_images.{ORDER_COLUMN} column is up-to-date")

        return fixed

    except SQLAlchemyError as e:
        logger.error(f"❌ Error ensuring product_images.{ORDER_COLUMN}: {e}")
        db.session.rollback()
        return False


def ensure_product_images_updated_at(db):
    """
    Ensure product_images has updated_at column.
    """
    try:
        columns = _image_columns(db)
        if columns is None:
            return False

        if 'updated_at' not in columns:
            logger.warning("⚠️  Missing 'updated_at' column in product_images table - FIXING...")
            db.session.execute(text("""
                ALTER TABLE product_images
                ADD COLUMN updated_at DATETIME NULL
            """))
            db.session.commit()
            logger.info("✅ Added 'updated_at' column to product_images table")
            return True

        logger.debug("✓ product_images.updated_at column exists")
        return False

    except SQLAlchemyError as e:
        logger.error(f"❌ Error ensuring product_images.updated_at: {e}")
        db.session.rollback()
        return False


def run_all_migrations(db, app):
    """
    Run all database migrations.
    This is called automatically on app startup.
    """
    logger.info("🔧 Running database migrations...")

    with app.app_context():
        migrations = [
            ('product_images.display_order', ensure_product_images_order_column),
            ('product_images.updated_at', ensure_product_images_updated_at),
        ]

        fixed_count = 0
        for name, migration_func in migrations:
            if migration_func(db):
                fixed_count += 1
                logger.info(f"  ✅ Fixed: {name}")

        if fixed_count > 0:
            logger.info(f"🎉 Database migrations complete - {fixed_count} schema issues fixed")
        else:
            logger.info("✓ All database schemas are up-to-date")

        return fixed_count
