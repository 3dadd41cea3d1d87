"""Activity log and notification service for multi-tenant retail shops."""
