"""queueboard API - live control surface over Redis-backed job queues."""

__version__ = "0.1.0"
