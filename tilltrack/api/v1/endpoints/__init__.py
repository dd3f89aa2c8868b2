"""
Endpoint routers for API v1.
"""
