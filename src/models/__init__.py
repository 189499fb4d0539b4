from models.base import db
from models.product import Product, SIZE_RANK, SortOrder

__all__ = ["db", "Product", "SIZE_RANK", "SortOrder"]
