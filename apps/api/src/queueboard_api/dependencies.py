"""FastAPI dependency injection.

The registry, discovery service and reset executor are built once per
application from that application's settings and kept on ``app.state``.
"""

from fastapi import Request

from queueboard_api.config import Settings
from queueboard_api.services.adapter_factory import AdapterFactory
from queueboard_api.services.bulk_reset import BulkResetExecutor
from queueboard_api.services.discovery import DiscoveryService
from queueboard_api.services.keyspace_scanner import KeyspaceScanner
from queueboard_api.services.queue_registry import QueueRegistry


def build_discovery_service(app_settings: Settings, registry: QueueRegistry) -> DiscoveryService:
    """Discovery service scanning the store described by ``app_settings``."""
    profile = app_settings.connection_profile()
    return DiscoveryService(
        scanner=KeyspaceScanner.from_profile(profile, scan_count=app_settings.scan_count),
        factory=AdapterFactory(profile, app_settings.engine_version()),
        registry=registry,
    )


def build_bulk_reset_executor(
    app_settings: Settings, registry: QueueRegistry
) -> BulkResetExecutor:
    return BulkResetExecutor(registry, max_concurrency=app_settings.reset_max_concurrency)


def get_settings(request: Request) -> Settings:
    """Get application settings."""
    return request.app.state.settings


def get_queue_registry(request: Request) -> QueueRegistry:
    """Get the application's queue registry."""
    return request.app.state.queue_registry


def get_discovery_service(request: Request) -> DiscoveryService:
    """Get the application's discovery service."""
    return request.app.state.discovery


def get_bulk_reset_executor(request: Request) -> BulkResetExecutor:
    """Get the application's bulk reset executor."""
    return request.app.state.bulk_reset_executor
