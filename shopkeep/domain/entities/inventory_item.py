"""Domain entity describing the stock level of a product."""

from dataclasses import dataclass


@dataclass(frozen=True)
class InventoryItem:
    """Snapshot of a product's stock as seen by the low stock scanner."""

    product_id: int
    product_name: str
    sku: str | None
    quantity: int
    reorder_point: int

    def is_low_stock(self) -> bool:
        """Return ``True`` when the quantity reached the reorder threshold.

        A reorder point of zero disables alerts for the product.
        """

        return self.reorder_point > 0 and self.quantity <= self.reorder_point


__all__ = ["InventoryItem"]
