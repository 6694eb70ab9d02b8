"""
Selection state for the cart item customization dialog
"""
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from database_utils import ValidationError


@dataclass
class ProductDescription:
    """The slice of a product the editor needs"""
    name: str
    color: Optional[str] = None
    features: List[str] = field(default_factory=list)

    @classmethod
    def from_product(cls, product) -> "ProductDescription":
        return cls(name=product.name, color=product.color, features=product.feature_list)

    @property
    def available_colors(self) -> List[str]:
        if not self.color:
            return []
        return [c.strip() for c in self.color.split(',') if c.strip()]


class CartItemEditor:
    """Tracks the color and features chosen for one cart item"""

    def __init__(self, product: ProductDescription,
                 on_save: Callable[[Optional[str], List[str]], None],
                 on_cancel: Callable[[], None],
                 current_color: Optional[str] = None,
                 current_features: Optional[List[str]] = None):
        self.product = product
        self.on_save = on_save
        self.on_cancel = on_cancel
        self.current_color = current_color
        self.current_features = list(current_features or [])
        self.is_open = False
        self.selected_color = current_color
        self.selected_features = list(self.current_features)

    @property
    def available_colors(self) -> List[str]:
        return self.product.available_colors

    @property
    def available_features(self) -> List[str]:
        return list(self.product.features or [])

    def open(self):
        """Reset selections to the cart item's current values"""
        self.selected_color = self.current_color
        self.selected_features = list(self.current_features)
        self.is_open = True

    def select_color(self, color: str):
        if color not in self.available_colors:
            raise ValidationError(f"{color!r} is not available for {self.product.name}")
        self.selected_color = None if self.selected_color == color else color

    def toggle_feature(self, feature: str):
        if feature not in self.available_features:
            raise ValidationError(f"{feature!r} is not a feature of {self.product.name}")
        if feature in self.selected_features:
            self.selected_features = [f for f in self.selected_features if f != feature]
        else:
            self.selected_features = self.selected_features + [feature]

    def save(self):
        self.is_open = False
        self.on_save(self.selected_color, list(self.selected_features))

    def cancel(self):
        self.is_open = False
        self.on_cancel()
