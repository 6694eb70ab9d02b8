#!/usr/bin/env python3
"""
Read-only health check for product image order and primary images
"""
import argparse
import sys

from app_factory import create_app
from database_utils import StorageUnavailableError, check_database_connection
from models import db
from services.image_ordering import ImageOrderingService
from services.image_reports import print_audit_report
from services.image_store import ImageStore


def check_images(app):
    with app.app_context():
        ok, message = check_database_connection(db)
        if not ok:
            print(f"❌ {message}")
            return False

        print("🔍 Checking product images...\n")
        service = ImageOrderingService(ImageStore(db.session))
        try:
            audit = service.audit_consistency()
        except StorageUnavailableError as e:
            print(f"❌ Error checking product images: {e}")
            return False

        return print_audit_report(audit)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Check product image order and primary images')
    parser.add_argument('--env', default=None, help='Configuration name (development, production, testing)')

    args = parser.parse_args(argv)

    consistent = check_images(create_app(args.env))
    if not consistent:
        print("\n💡 Run fix_image_order.py to repair the products listed above")
    return 0 if consistent else 1


if __name__ == '__main__':
    sys.exit(main())
