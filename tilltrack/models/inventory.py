"""
Catalog models: products, categories and stock alerts.
"""
from datetime import datetime
from typing import Optional
import enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tilltrack.core import clock
from tilltrack.services.tax import TAX_RATES, is_valid_tax_rate


class ProductCategory(str, enum.Enum):
    """Product category enumeration."""
    MEALS = "meals"
    DRINKS = "drinks"
    ALCOHOL = "alcohol"
    DESSERTS = "desserts"
    SANDWICHES = "sandwiches"
    ICE_CREAM = "ice_cream"
    COMBOS = "combos"
    SNACKS = "snacks"
    OTHER = "other"


class StockStatus(str, enum.Enum):
    """Stock alert status, most severe first."""
    OUT = "out"
    CRITICAL = "critical"
    LOW = "low"


class Product(BaseModel):
    """Catalog entry. Prices are tax-inclusive."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float = Field(..., ge=0)
    category: ProductCategory = ProductCategory.OTHER
    tax_rate: float
    color: Optional[str] = None
    icon: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    min_stock: Optional[int] = Field(None, ge=0)
    is_active: bool = True
    created_at: datetime = Field(default_factory=clock.now)
    updated_at: datetime = Field(default_factory=clock.now)

    @field_validator("tax_rate")
    @classmethod
    def validate_tax_rate(cls, v):
        if not is_valid_tax_rate(v):
            rates = ", ".join(str(rate) for rate in TAX_RATES)
            raise ValueError(f"Tax rate must be one of {rates}")
        return v

    @property
    def tracks_stock(self) -> bool:
        return self.stock is not None


class StockAlert(BaseModel):
    """Product whose stock fell to or under its minimum."""
    product: Product
    current_stock: int
    min_stock: int
    status: StockStatus
