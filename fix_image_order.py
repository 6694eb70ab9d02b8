#!/usr/bin/env python3
"""
Renumber product images 1..N by upload time and make the first image primary.

Safe to re-run: products that are already in order are not written.

Usage:
  python3 fix_image_order.py                      # every product with images
  python3 fix_image_order.py --product-id 12 40   # only these products
"""
import argparse
import sys

from app_factory import create_app
from models import db
from services.image_ordering import ImageOrderingService
from services.image_reports import print_audit_report, print_repair_reports
from services.image_store import ImageStore


def fix_image_order(app, product_ids=None):
    """Run a repair pass and verify it. Returns True when nothing failed and the audit is clean."""
    with app.app_context():
        service = ImageOrderingService(ImageStore(db.session))

        print("\n1️⃣ Repairing image order and primary images...")
        if product_ids:
            reports = service.repair_products(product_ids)
        else:
            reports = service.repair_all()
        _total, _changed, failed = print_repair_reports(reports)

        print("\n2️⃣ Verifying the fix...")
        consistent = print_audit_report(service.audit_consistency())

    return failed == 0 and consistent


def main(argv=None):
    parser = argparse.ArgumentParser(description='Fix product image order and primary images')
    parser.add_argument('--product-id', type=int, nargs='+', help='Only repair these product IDs')
    parser.add_argument('--env', default=None, help='Configuration name (development, production, testing)')

    args = parser.parse_args(argv)

    print("🔧 Fixing product image order...")
    app = create_app(args.env)
    success = fix_image_order(app, args.product_id)

    if success:
        print("\n🎉 Product image order fix completed!")
    else:
        print("\n⚠️ Some products still need attention - re-run after checking the errors above")
    return 0 if success else 1


if __name__ == '__main__':
    sys.exit(main())
