"""Shared SQLAlchemy models registry for the workspace database.

Currently includes the point-of-sale models used by ``point_of_sale``.
"""

from .pos import Base, PosCatalogItem, PosSale, PosSaleLine

__all__ = [
    "Base",
    "PosCatalogItem",
    "PosSale",
    "PosSaleLine",
]
