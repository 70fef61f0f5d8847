"""Web helpers for the queueboard dashboard."""
