"""
Main API router for v1 endpoints.
"""
from fastapi import APIRouter

from tilltrack.api.v1.endpoints import cart, dashboard, demo, products, sales, traffic

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(cart.router, prefix="/cart", tags=["cart"])
api_router.include_router(sales.router, prefix="/sales", tags=["sales"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(traffic.router, prefix="/traffic", tags=["traffic"])
api_router.include_router(demo.router, prefix="/demo", tags=["demo"])
