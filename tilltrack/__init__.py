"""
TillTrack: point-of-sale cart, sales recording and traffic analytics.
"""

__version__ = "1.0.0"
