"""Services for queueboard API."""

from queueboard_api.services.adapter_factory import AdapterFactory
from queueboard_api.services.bulk_reset import BulkResetExecutor
from queueboard_api.services.discovery import DiscoveryService
from queueboard_api.services.keyspace_scanner import KeyspaceScanner
from queueboard_api.services.queue_registry import QueueRegistry

__all__ = [
    "AdapterFactory",
    "BulkResetExecutor",
    "DiscoveryService",
    "KeyspaceScanner",
    "QueueRegistry",
]
