"""
Core infrastructure: configuration, logging, storage and time policy.
"""
