"""Storefront product catalog and cart API"""

__version__ = "3.0.0"
