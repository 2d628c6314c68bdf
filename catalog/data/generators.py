"""
Synthetic Product Generator

Generates plausible random products from fixed vocabularies for testing,
demos and bulk loading. All randomness comes from one Faker instance, so a
seeded generator is reproducible.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from faker import Faker

from catalog.database.models import AvailabilityStatus, utcnow


# =============================================================================
# CONFIGURATION
# =============================================================================

CATEGORIES = [
    "Electronics", "Clothing", "Books", "Sports",
    "Home", "Beauty", "Toys", "Automotive",
]

BRANDS = [
    "TechCorp", "StyleWear", "BookWorld", "SportsPro",
    "HomePlus", "BeautyMax", "ToyLand", "AutoGear",
]

NAME_PREFIXES = {
    "Electronics": ["Smart", "Wireless", "Digital", "Portable", "Ultra"],
    "Clothing": ["Classic", "Modern", "Vintage", "Casual", "Premium"],
    "Books": ["Complete", "Essential", "Illustrated", "Ultimate", "Pocket"],
    "Sports": ["Pro", "Elite", "Active", "Performance", "Trail"],
    "Home": ["Cozy", "Elegant", "Rustic", "Compact", "Deluxe"],
    "Beauty": ["Radiant", "Natural", "Hydrating", "Luxury", "Gentle"],
    "Toys": ["Fun", "Creative", "Magic", "Adventure", "Junior"],
    "Automotive": ["Heavy Duty", "Turbo", "Precision", "All Weather", "Rapid"],
}

ITEM_NOUNS = {
    "Electronics": ["Speaker", "Headphones", "Charger", "Monitor", "Camera"],
    "Clothing": ["Jacket", "Shirt", "Jeans", "Sweater", "Dress"],
    "Books": ["Guide", "Novel", "Handbook", "Anthology", "Cookbook"],
    "Sports": ["Running Shoes", "Yoga Mat", "Dumbbell Set", "Tennis Racket", "Water Bottle"],
    "Home": ["Lamp", "Blanket", "Cookware Set", "Vase", "Storage Box"],
    "Beauty": ["Serum", "Moisturizer", "Lipstick", "Shampoo", "Face Mask"],
    "Toys": ["Puzzle", "Building Blocks", "Action Figure", "Board Game", "Plush Toy"],
    "Automotive": ["Floor Mats", "Car Charger", "Tire Inflator", "Seat Cover", "Dash Cam"],
}

TRAITS = {
    "Electronics": ["cutting-edge technology", "long battery life", "fast connectivity", "a sleek design"],
    "Clothing": ["breathable fabric", "a tailored fit", "durable stitching", "timeless style"],
    "Books": ["engaging storytelling", "expert insights", "beautiful illustrations", "practical advice"],
    "Sports": ["lightweight construction", "superior grip", "an ergonomic design", "weather resistance"],
    "Home": ["premium materials", "a space-saving design", "easy maintenance", "an elegant finish"],
    "Beauty": ["natural ingredients", "long-lasting results", "a gentle formula", "a refreshing scent"],
    "Toys": ["hours of entertainment", "safe materials", "educational value", "vibrant colors"],
    "Automotive": ["rugged durability", "easy installation", "a universal fit", "reliable performance"],
}

AVAILABILITY_STATUSES = [status.value for status in AvailabilityStatus]

MIN_PRICE = 0.01
MAX_PRICE = 999.99
MAX_QUANTITY = 100
MIN_RATING = 1.0
MAX_RATING = 5.0
RELEASE_WINDOW = timedelta(days=365)


# =============================================================================
# GENERATOR
# =============================================================================

class ProductGenerator:
    """
    Generate synthetic product records.

    Records are plain dicts keyed by ``Product`` column name and are not
    persisted. SKUs are not de-duplicated here; callers that persist records
    redraw collisions with ``sku_for``.

    Example:
        generator = ProductGenerator(seed=42)
        records = generator.generate(10)
    """

    def __init__(self, faker: Optional[Faker] = None, seed: Optional[int] = None):
        self.faker = faker or Faker()
        if seed is not None:
            self.faker.seed_instance(seed)

    def sku_for(self, brand: str, category: str) -> str:
        """SKU in the form ``BRA-CAT-NNNN``"""
        return f"{brand[:3].upper()}-{category[:3].upper()}-{self.faker.numerify('####')}"

    def generate_one(self, now: datetime) -> Dict[str, Any]:
        """Generate a single product record stamped with ``now``"""
        random = self.faker.random
        category = self.faker.random_element(CATEGORIES)
        brand = self.faker.random_element(BRANDS)

        prefix = self.faker.random_element(NAME_PREFIXES[category])
        noun = self.faker.random_element(ITEM_NOUNS[category])
        trait = self.faker.random_element(TRAITS[category])

        release_offset = timedelta(seconds=random.random() * RELEASE_WINDOW.total_seconds())

        return {
            "name": f"{prefix} {noun} {self.faker.random_int(min=0, max=999)}",
            "description": (
                f"High-quality {category.lower()} product featuring {trait} "
                f"and exceptional value."
            ),
            "category": category,
            "brand": brand,
            "price": round(random.uniform(MIN_PRICE, MAX_PRICE), 2),
            "quantity": self.faker.random_int(min=0, max=MAX_QUANTITY - 1),
            "sku": self.sku_for(brand, category),
            "release_date": now - release_offset,
            "availability_status": self.faker.random_element(AVAILABILITY_STATUSES),
            "customer_rating": round(random.uniform(MIN_RATING, MAX_RATING), 1),
            "created_at": now,
            "updated_at": now,
        }

    def generate(self, n: int, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """
        Generate n product records.

        Args:
            n: Number of records; non-positive values yield an empty list
            now: Timestamp shared by every record of this call

        Returns:
            List of unsaved product records
        """
        now = now or utcnow()
        return [self.generate_one(now) for _ in range(n)]
