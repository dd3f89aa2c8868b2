"""
Domain models for TillTrack application.
"""

from .inventory import Product, ProductCategory, StockAlert, StockStatus
from .sales import CartLine, CartTotals, PaymentMethod, Transaction
from .analytics import (
    DailySales,
    DashboardStats,
    HourlySales,
    PeakHour,
    ProductSales,
    StaffRecommendation,
    TrafficAnalysis,
    TrafficLevel,
)

__all__ = [
    "Product", "ProductCategory", "StockAlert", "StockStatus",
    "CartLine", "CartTotals", "PaymentMethod", "Transaction",
    "DailySales", "DashboardStats", "HourlySales", "PeakHour",
    "ProductSales", "StaffRecommendation", "TrafficAnalysis", "TrafficLevel"
]
