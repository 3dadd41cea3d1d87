"""Inventory related use cases."""

from .low_stock import check_low_stock, low_stock_alert_input, scan_low_stock

__all__ = ["check_low_stock", "low_stock_alert_input", "scan_low_stock"]
