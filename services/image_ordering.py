"""
Image ordering service

Keeps every product's images in a gapless 1..N order with exactly one primary
image, the one at position 1.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterator, List, Optional

from database_utils import ImageCatalogError, NotFoundError, require_product_id
from services.image_locks import ParentLockRegistry

logger = logging.getLogger(__name__)


@dataclass
class RepairReport:
    """Outcome of one repair step for one product"""
    product_id: int
    record_count: int = 0
    changed_count: int = 0
    toggled_count: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class AuditReport:
    """Invariant violations found by a read-only audit"""
    position_issues: List[int] = field(default_factory=list)
    missing_primary: List[int] = field(default_factory=list)
    multiple_primaries: List[int] = field(default_factory=list)
    primary_not_first: List[int] = field(default_factory=list)
    null_position_count: int = 0
    image_counts: Dict[int, int] = field(default_factory=dict)

    @property
    def product_count(self) -> int:
        return len(self.image_counts)

    @property
    def multi_image_products(self) -> Dict[int, int]:
        return {pid: count for pid, count in self.image_counts.items() if count > 1}

    @property
    def consistent(self) -> bool:
        return not (self.position_issues or self.missing_primary
                    or self.multiple_primaries or self.primary_not_first)


def _upload_order(record):
    # Legacy rows can lack created_at; they go after timestamped uploads
    missing = record.created_at is None
    return (missing, record.created_at or datetime.min, record.id)


class ImageOrderingService:
    """Repairs and audits image order and primary flags through an ImageStore"""

    def __init__(self, store, locks=None):
        self.store = store
        self.locks = locks or ParentLockRegistry()

    def normalize_positions(self, product_id) -> RepairReport:
        """
        Renumber a product's images 1..N by upload time.

        Only images whose position actually changes are written.
        """
        product_id = require_product_id(product_id)
        with self.locks.hold(product_id):
            images = sorted(self.store.list_images(product_id=product_id), key=_upload_order)
            report = RepairReport(product_id=product_id, record_count=len(images))

            for index, image in enumerate(images):
                desired = index + 1
                if image.position != desired:
                    self.store.update_image(image.id, position=desired)
                    report.changed_count += 1

        if report.changed_count:
            logger.info(f"Renumbered {report.changed_count}/{report.record_count} image(s) for product {product_id}")
        return report

    def assign_primary(self, product_id) -> RepairReport:
        """
        Make the position-1 image the only primary image.

        Stale primaries are cleared before the new one is set.
        """
        product_id = require_product_id(product_id)
        with self.locks.hold(product_id):
            images = self.store.list_images(product_id=product_id)
            report = RepairReport(product_id=product_id, record_count=len(images))
            if not images:
                return report

            first = next((img for img in images if img.position == 1), None)
            if first is None:
                raise NotFoundError(f"Product {product_id} has {len(images)} image(s) but none at position 1")

            for image in images:
                if image.is_primary and image.id != first.id:
                    self.store.update_image(image.id, is_primary=False)
                    report.toggled_count += 1

            if not first.is_primary:
                self.store.update_image(first.id, is_primary=True)
                report.toggled_count += 1

        if report.toggled_count:
            logger.info(f"Set image {first.id} as primary for product {product_id} ({report.toggled_count} change(s))")
        return report

    def repair_product(self, product_id) -> RepairReport:
        """One repair pass: normalize positions, then assign the primary image"""
        product_id = require_product_id(product_id)
        with self.locks.hold(product_id):
            normalized = self.normalize_positions(product_id)
            primary = self.assign_primary(product_id)

        return RepairReport(
            product_id=product_id,
            record_count=primary.record_count,
            changed_count=normalized.changed_count,
            toggled_count=primary.toggled_count,
        )

    def repair_all(self) -> Iterator[RepairReport]:
        """
        Repair every product that has images, yielding one report per product.

        A failure on one product is recorded in its report and does not stop
        the remaining products.
        """
        return self.repair_products(self.store.list_product_ids())

    def repair_products(self, product_ids) -> Iterator[RepairReport]:
        """Repair the given products in order, isolating per-product failures"""
        for product_id in product_ids:
            try:
                report = self.repair_product(product_id)
            except ImageCatalogError as e:
                logger.error(f"❌ Repair failed for product {product_id}: {e}")
                report = RepairReport(product_id=product_id, error=f"{type(e).__name__}: {e}")
            except Exception as e:
                logger.exception(f"❌ Unexpected error repairing product {product_id}")
                report = RepairReport(product_id=product_id, error=f"{type(e).__name__}: {e}")
            yield report

    def audit_consistency(self) -> AuditReport:
        """Check ordering and primary invariants without writing anything"""
        grouped = defaultdict(list)
        for image in self.store.list_images():
            grouped[image.product_id].append(image)

        report = AuditReport()

        for product_id in sorted(grouped):
            images = grouped[product_id]
            report.image_counts[product_id] = len(images)

            positions = sorted(img.position for img in images if img.position is not None)
            report.null_position_count += len(images) - len(positions)
            if positions != list(range(1, len(images) + 1)):
                report.position_issues.append(product_id)

            primary_count = sum(1 for img in images if img.is_primary)
            if primary_count == 0:
                report.missing_primary.append(product_id)
            elif primary_count > 1:
                report.multiple_primaries.append(product_id)
            elif not any(img.is_primary and img.position == 1 for img in images):
                report.primary_not_first.append(product_id)

        return report
