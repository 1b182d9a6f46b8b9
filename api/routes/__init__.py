"""API routes package"""

from . import bills, consumers, health

__all__ = ["bills", "consumers", "health"]
