"""
Storage access for product images
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from database_utils import NotFoundError, ValidationError, storage_operation
from models import ProductImage

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('position', 'is_primary')


@dataclass(frozen=True)
class ImageRecord:
    """Read-only snapshot of one product_images row"""
    id: int
    product_id: int
    position: Optional[int]
    is_primary: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, image: ProductImage) -> "ImageRecord":
        return cls(
            id=image.id,
            product_id=image.product_id,
            position=image.position,
            is_primary=bool(image.is_primary),
            created_at=image.created_at,
            updated_at=image.updated_at,
        )


class ImageStore:
    """Reads and updates product_images rows through a SQLAlchemy session"""

    def __init__(self, session):
        self.session = session

    @storage_operation
    def list_images(self, product_id: Optional[int] = None, position_is_null: Optional[bool] = None,
                    is_primary: Optional[bool] = None) -> List[ImageRecord]:
        """
        List images, optionally filtered.

        Args:
            product_id: only images of this product
            position_is_null: True for images without a position, False for images with one
            is_primary: filter on the primary flag

        Returns:
            List[ImageRecord] ordered by product, upload time and id
        """
        query = self.session.query(ProductImage)
        if product_id is not None:
            query = query.filter(ProductImage.product_id == product_id)
        if position_is_null is True:
            query = query.filter(ProductImage.position.is_(None))
        elif position_is_null is False:
            query = query.filter(ProductImage.position.isnot(None))
        if is_primary is not None:
            query = query.filter(ProductImage.is_primary == bool(is_primary))

        query = query.order_by(ProductImage.product_id, ProductImage.created_at, ProductImage.id)
        return [ImageRecord.from_model(img) for img in query.all()]

    @storage_operation
    def list_product_ids(self) -> List[int]:
        """Distinct product ids that have at least one image, ascending"""
        rows = (
            self.session.query(ProductImage.product_id)
            .distinct()
            .order_by(ProductImage.product_id)
            .all()
        )
        return [row[0] for row in rows]

    @storage_operation
    def update_image(self, image_id: int, **fields) -> ImageRecord:
        """Update position and/or is_primary on one image and commit"""
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update field(s) {', '.join(sorted(unknown))} on product images")

        image = self.session.get(ProductImage, image_id)
        if image is None:
            raise NotFoundError(f"Product image {image_id} not found")

        for name, value in fields.items():
            setattr(image, name, value)
        image.updated_at = datetime.utcnow()
        self.session.commit()

        logger.debug(f"Updated image {image_id}: {fields}")
        return ImageRecord.from_model(image)
