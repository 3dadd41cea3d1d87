"""Errors raised by product use cases."""


class ProductNotFoundError(ValueError):
    """The product does not exist in the caller's shop."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


__all__ = ["ProductNotFoundError"]
