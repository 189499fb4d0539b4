import enum

from sqlalchemy import Column, Integer, String, Float
from models.base import db

# Position of each known size in the catalogue; anything else sorts last.
SIZE_RANK = {
    'xs': 1,
    's': 2,
    'm': 3,
    'l': 4,
    'xl': 5,
    'xxl': 6,
}
UNKNOWN_SIZE_RANK = 7


class SortOrder(enum.Enum):
    """Orderings the product list can be requested in."""
    DEFAULT = ''
    SIZE = 'size'
    PRICE = 'price'
    NAME = 'name'

    @classmethod
    def parse(cls, value):
        """Map a raw ``sort`` query value onto a known ordering.

        Unknown values fall back to ``DEFAULT`` so user input never ends up in
        the ORDER BY clause.
        """
        try:
            return cls((value or '').strip().lower())
        except ValueError:
            return cls.DEFAULT


class Product(db.Model):
    __tablename__ = 'products'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    size = Column(String(10), nullable=False)
    price = Column(Float, nullable=False)

    @property
    def size_rank(self):
        return SIZE_RANK.get(self.size, UNKNOWN_SIZE_RANK)

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', size='{self.size}', price={self.price})>"
