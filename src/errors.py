"""Error taxonomy for the product admin.

Every error carries the HTTP status it maps to and a plain-text message that is
safe to show to the operator.
"""


class ProductAdminError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(ProductAdminError):
    """Request input that could not be parsed (bad id, bad form field)."""
    status_code = 400
    message = "Invalid request"


class NotFound(ProductAdminError):
    status_code = 404
    message = "Product not found"


class RateLimited(ProductAdminError):
    status_code = 429
    message = "Rate limit exceeded"


class StoreError(ProductAdminError):
    """A statement against the products table failed."""
    status_code = 500
    message = "Error accessing the database"


class QueryError(StoreError):
    message = "Error fetching products from the database"
