"""
Human-readable output for repair and audit reports
"""
import logging

logger = logging.getLogger(__name__)


def format_repair_report(report):
    if not report.ok:
        return f"❌ Product {report.product_id}: {report.error}"
    if report.changed_count or report.toggled_count:
        return (f"✅ Product {report.product_id}: {report.record_count} image(s), "
                f"{report.changed_count} renumbered, {report.toggled_count} primary flag(s) changed")
    return f"✓ Product {report.product_id}: {report.record_count} image(s) already in order"


def print_repair_reports(reports, out=print):
    """
    Print each repair report as it arrives and return (total, changed, failed) counts
    """
    total = changed = failed = 0
    for report in reports:
        total += 1
        if not report.ok:
            failed += 1
            logger.warning(f"Product {report.product_id} was not repaired: {report.error}")
        elif report.changed_count or report.toggled_count:
            changed += 1
        out(f"   {format_repair_report(report)}")

    out("")
    out(f"📊 Products processed: {total}, repaired: {changed}, failed: {failed}")
    return total, changed, failed


def print_audit_report(audit, out=print):
    out(f"📊 Found {audit.product_count} products with images")

    multi = audit.multi_image_products
    out(f"📊 Found {len(multi)} products with multiple images")
    for product_id, count in sorted(multi.items()):
        out(f"   - Product ID: {product_id} ({count} images)")

    if audit.null_position_count:
        out(f"⚠️ {audit.null_position_count} image(s) have no display order")

    checks = [
        (audit.position_issues, "Products with gaps or duplicates in display order",
         "All display orders are consistent"),
        (audit.missing_primary, "Products without primary images",
         "All products with images have primary images"),
        (audit.multiple_primaries, "Products with multiple primary images",
         "No product has more than one primary image"),
        (audit.primary_not_first, "Products whose primary image is not first",
         "Every primary image is at position 1"),
    ]
    for product_ids, problem, healthy in checks:
        if product_ids:
            out(f"⚠️ {problem}:")
            for product_id in product_ids:
                out(f"   - Product {product_id}")
        else:
            out(f"✅ {healthy}")

    return audit.consistent
