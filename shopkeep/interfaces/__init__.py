"""Delivery interfaces for the service."""
