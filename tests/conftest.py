from datetime import datetime, timedelta

import pytest

from app_factory import create_app
from models import db, Product, ProductImage
from services.image_ordering import ImageOrderingService
from services.image_store import ImageStore

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def minutes(n):
    return BASE_TIME + timedelta(minutes=n)


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def make_product(app):
    def _make(name="Test Product", color=None, features=None):
        product = Product(name=name, color=color, features=features)
        db.session.add(product)
        db.session.commit()
        return product.id
    return _make


@pytest.fixture
def make_image(app):
    def _make(product_id, created_at, position=None, is_primary=False):
        image = ProductImage(
            product_id=product_id,
            url=f"images/{product_id}_{created_at:%H%M%S}.jpg",
            position=position,
            is_primary=is_primary,
            created_at=created_at,
        )
        db.session.add(image)
        db.session.commit()
        return image.id
    return _make


@pytest.fixture
def store(app):
    return ImageStore(db.session)


@pytest.fixture
def service(store):
    return ImageOrderingService(store)


def image_state(product_id):
    """(id, position, is_primary) for a product's images, by id"""
    db.session.expire_all()
    images = ProductImage.query.filter_by(product_id=product_id).order_by(ProductImage.id).all()
    return [(img.id, img.position, img.is_primary) for img in images]
