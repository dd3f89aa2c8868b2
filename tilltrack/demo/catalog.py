"""
Starter catalog, installed by the demo seeding when the store has no
products and restored by :meth:`CatalogService.reset`.

Entries carry a fixed creation time so that a seeded history is the same
from one run to the next.
"""
from datetime import datetime
from typing import List

from tilltrack.models.inventory import Product, ProductCategory
from tilltrack.services.tax import REDUCED_RATE, STANDARD_RATE

CATALOG_CREATED_AT = datetime(2024, 1, 1)

DEFAULT_PRODUCTS = [
    # id, name, price, category, tax rate, stock, min stock
    ("prod-rice-curry", "Chicken curry with rice", 9.50, ProductCategory.MEALS, REDUCED_RATE, None, None),
    ("prod-daily-special", "Daily special", 11.00, ProductCategory.MEALS, REDUCED_RATE, None, None),
    ("prod-club-sandwich", "Club sandwich", 5.50, ProductCategory.SANDWICHES, REDUCED_RATE, 30, 10),
    ("prod-samosas", "Samosas (x4)", 3.00, ProductCategory.SNACKS, REDUCED_RATE, 40, 15),
    ("prod-fries", "Fries", 2.50, ProductCategory.SNACKS, REDUCED_RATE, None, None),
    ("prod-water", "Still water 50cl", 1.50, ProductCategory.DRINKS, REDUCED_RATE, 120, 24),
    ("prod-soda", "Soda can", 2.00, ProductCategory.DRINKS, REDUCED_RATE, 96, 24),
    ("prod-coffee", "Espresso", 1.80, ProductCategory.DRINKS, REDUCED_RATE, None, None),
    ("prod-beer", "Local beer 33cl", 3.50, ProductCategory.ALCOHOL, STANDARD_RATE, 48, 12),
    ("prod-rum-punch", "Rum punch", 4.50, ProductCategory.ALCOHOL, STANDARD_RATE, 6, 10),
    ("prod-cake", "Coconut cake", 3.20, ProductCategory.DESSERTS, REDUCED_RATE, 2, 8),
    ("prod-ice-cream", "Vanilla ice cream", 2.80, ProductCategory.ICE_CREAM, REDUCED_RATE, 0, 5),
    ("prod-lunch-combo", "Lunch combo", 12.50, ProductCategory.COMBOS, REDUCED_RATE, None, None),
]


def default_products() -> List[Product]:
    return [
        Product(
            id=product_id,
            name=name,
            price=price,
            category=category,
            tax_rate=tax_rate,
            stock=stock,
            min_stock=min_stock,
            created_at=CATALOG_CREATED_AT,
            updated_at=CATALOG_CREATED_AT,
        )
        for product_id, name, price, category, tax_rate, stock, min_stock in DEFAULT_PRODUCTS
    ]
