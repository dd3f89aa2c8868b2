"""
Analytics models returned by the aggregation engine and traffic analyzer.
"""
from datetime import date
from typing import List
import enum

from pydantic import BaseModel

from tilltrack.models.inventory import Product, StockAlert


class TrafficLevel(str, enum.Enum):
    """Relative customer volume of an hour versus the busiest hour."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class HourlySales(BaseModel):
    hour: int
    revenue: float = 0.0
    transaction_count: int = 0
    customer_count: int = 0


class ProductSales(BaseModel):
    product: Product
    quantity_sold: int
    revenue: float


class DashboardStats(BaseModel):
    """Figures shown on the daily dashboard."""
    today_revenue: float
    today_tax: float
    today_transactions: int
    average_ticket: float
    comparison_yesterday: float  # percent change versus yesterday
    top_products: List[ProductSales]
    stock_alerts: List[StockAlert]
    hourly_data: List[HourlySales]


class DailySales(BaseModel):
    day: date
    total_revenue: float
    total_tax: float
    transaction_count: int
    average_ticket: float
    hourly_breakdown: List[HourlySales]


class PeakHour(BaseModel):
    hour: int
    average_customers: float
    average_revenue: float
    level: TrafficLevel


class StaffRecommendation(BaseModel):
    """Staffing advice for a contiguous run of hours sharing one level."""
    time_slot: str
    start_hour: int
    end_hour: int  # exclusive
    recommended_staff: int
    traffic_level: TrafficLevel
    reason: str


class TrafficAnalysis(BaseModel):
    peak_hours: List[PeakHour]
    recommendations: List[StaffRecommendation]
    average_customers_per_hour: float
    busiest_day: str
    quietest_day: str
