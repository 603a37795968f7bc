"""Business logic and data access for the dashboard service."""
