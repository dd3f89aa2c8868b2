"""
Catalog service for product CRUD and stock levels.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from tilltrack.core import clock
from tilltrack.core.exceptions import ProductNotFoundError
from tilltrack.core.repository import Repository
from tilltrack.demo.catalog import default_products
from tilltrack.models.inventory import Product, ProductCategory
from tilltrack.models.sales import Transaction

logger = logging.getLogger(__name__)


def generate_product_id() -> str:
    return f"prod-{uuid.uuid4().hex[:12]}"


class CatalogService:
    """Service for reading and updating the product catalog."""

    def __init__(self, repository: Repository):
        self.repository = repository

    def list_products(self, active_only: bool = False,
                      category: Optional[ProductCategory] = None) -> List[Product]:
        products = self.repository.load_products()
        if active_only:
            products = [p for p in products if p.is_active]
        if category is not None:
            products = [p for p in products if p.category == category]
        return products

    def get_product(self, product_id: str) -> Product:
        for product in self.repository.load_products():
            if product.id == product_id:
                return product
        raise ProductNotFoundError(product_id)

    def add_product(self, data: Dict[str, Any]) -> Product:
        timestamp = clock.now()
        product = Product.model_validate({
            **data,
            "id": generate_product_id(),
            "created_at": timestamp,
            "updated_at": timestamp,
        })
        self.repository.save_products(self.repository.load_products() + [product])
        logger.info(f"Product added: {product.id} ({product.name})")
        return product

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Product:
        """Apply validated changes to a product."""
        def apply(product: Product) -> Product:
            data = product.model_dump()
            data.update(changes)
            data["id"] = product.id
            data["updated_at"] = clock.now()
            return Product.model_validate(data)

        return self._replace(product_id, apply)

    def delete_product(self, product_id: str) -> None:
        products = self.repository.load_products()
        remaining = [p for p in products if p.id != product_id]
        if len(remaining) == len(products):
            raise ProductNotFoundError(product_id)
        self.repository.save_products(remaining)
        logger.info(f"Product deleted: {product_id}")

    def toggle_active(self, product_id: str) -> Product:
        return self._replace(product_id, lambda p: p.model_copy(
            update={"is_active": not p.is_active, "updated_at": clock.now()}
        ))

    def reset(self) -> List[Product]:
        """Replace the catalog with the starter products."""
        products = default_products()
        self.repository.save_products(products)
        logger.info(f"Catalog reset to {len(products)} starter products")
        return products

    def update_stock(self, product_id: str, delta: int) -> Product:
        """Adjust stock by ``delta``, clamped at zero. Untracked products are unchanged."""
        return self._replace(product_id, lambda p: self._adjusted(p, delta))

    def record_sale(self, transaction: Transaction) -> None:
        """Decrement tracked stock for every line of a sale."""
        sold: Dict[str, int] = {}
        for line in transaction.lines:
            sold[line.product.id] = sold.get(line.product.id, 0) + line.quantity

        products = self.repository.load_products()
        updated = [
            self._adjusted(p, -sold[p.id]) if p.id in sold else p
            for p in products
        ]
        self.repository.save_products(updated)

    @staticmethod
    def _adjusted(product: Product, delta: int) -> Product:
        if product.stock is None:
            return product
        new_stock = max(0, product.stock + delta)
        if product.stock + delta < 0:
            logger.warning(f"Stock level for product {product.id} would go negative, set to 0")
        return product.model_copy(update={"stock": new_stock, "updated_at": clock.now()})

    def _replace(self, product_id: str, transform) -> Product:
        products = self.repository.load_products()
        for index, product in enumerate(products):
            if product.id == product_id:
                products[index] = transform(product)
                self.repository.save_products(products)
                return products[index]
        raise ProductNotFoundError(product_id)
