"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.consumer_mapper import ConsumerMapper

__all__ = ["ConsumerMapper"]
