"""Data access for the ``products`` table."""

from loguru import logger
from sqlalchemy import case, delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from errors import NotFound, QueryError, StoreError
from models.product import Product, SIZE_RANK, UNKNOWN_SIZE_RANK, SortOrder

# LIMIT and OFFSET are bound as signed 64-bit integers.
MAX_OFFSET = 2**63 - 1


def order_by_clauses(sort):
    """ORDER BY expressions for a sort choice. Ties are broken by id."""
    if sort is SortOrder.SIZE:
        return [case(SIZE_RANK, value=Product.size, else_=UNKNOWN_SIZE_RANK), Product.id]
    if sort is SortOrder.PRICE:
        return [Product.price, Product.id]
    if sort is SortOrder.NAME:
        return [Product.name, Product.id]
    return [Product.id]


def decode_row(row):
    """Build a detached Product from a selected row, or raise ValueError."""
    if row.id is None or row.name is None or row.size is None or row.price is None:
        raise ValueError(f"incomplete product row: {tuple(row)!r}")
    return Product(id=int(row.id), name=str(row.name), size=str(row.size), price=float(row.price))


class ProductRepository:
    """Issues statements against ``products`` through the request session."""

    def __init__(self, db):
        self._db = db

    @property
    def session(self):
        return self._db.session

    def list(self, filter=None, sort=SortOrder.DEFAULT, page=1, page_size=10):
        offset = (page - 1) * page_size
        if offset > MAX_OFFSET:
            return []

        statement = select(Product.id, Product.name, Product.size, Product.price)
        if filter:
            statement = statement.where(Product.name.icontains(filter, autoescape=True))
        statement = (
            statement.order_by(*order_by_clauses(sort))
            .limit(page_size)
            .offset(offset)
        )

        try:
            rows = self.session.execute(statement).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error fetching products from the database: {e}")
            raise QueryError() from e

        products = []
        for row in rows:
            try:
                products.append(decode_row(row))
            except (TypeError, ValueError) as e:
                logger.error(f"Error decoding product row: {e}")
                continue
        return products

    def get_by_id(self, product_id):
        try:
            product = self.session.get(Product, product_id)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error fetching product {product_id}: {e}")
            raise StoreError("Error fetching product details") from e
        if product is None:
            raise NotFound()
        return product

    def create(self, name, size, price):
        product = Product(name=name, size=size, price=price)
        try:
            self.session.add(product)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error inserting into database: {e}")
            raise StoreError("Error inserting into database") from e
        return product

    def update(self, product_id, name, size, price):
        statement = (
            update(Product)
            .where(Product.id == product_id)
            .values(name=name, size=size, price=price)
        )
        try:
            result = self.session.execute(statement)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error updating product in database: {e}")
            raise StoreError("Error updating product in database") from e

        if result.rowcount == 0:
            raise NotFound()
        return self.get_by_id(product_id)

    def delete(self, product_id):
        """Delete a product. Returns False when there was nothing to delete."""
        try:
            result = self.session.execute(delete(Product).where(Product.id == product_id))
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error deleting from database: {e}")
            raise StoreError("Error deleting from database") from e

        if result.rowcount == 0:
            logger.warning(f"Delete requested for missing product ID: {product_id}")
            return False
        return True
