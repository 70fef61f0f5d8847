"""Queue control routes: listing, discovery and the bulk reset."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from queueboard_api.config import Settings
from queueboard_api.dependencies import (
    get_bulk_reset_executor,
    get_discovery_service,
    get_queue_registry,
    get_settings,
)
from queueboard_api.domain.models import (
    BulkResetResult,
    DiscoveryFailed,
    DiscoveryStatus,
    QueueListResponse,
)
from queueboard_api.errors import DiscoveryError
from queueboard_api.security import require_operator
from queueboard_api.services.bulk_reset import BulkResetExecutor
from queueboard_api.services.discovery import DiscoveryService
from queueboard_api.services.queue_registry import QueueRegistry
from queueboard_api.services.queue_summary import summarize_all

router = APIRouter(prefix="/api", tags=["queues"], dependencies=[Depends(require_operator)])


@router.get("/queues", response_model=QueueListResponse)
async def list_queues(
    registry: QueueRegistry = Depends(get_queue_registry),
    discovery: DiscoveryService = Depends(get_discovery_service),
    app_settings: Settings = Depends(get_settings),
) -> QueueListResponse:
    """List registered queues with their job counts.

    Before the first discovery pass completes the list is empty and
    ``populated`` is false. A failed pass is reported in ``discovery`` and
    ``discovery_error``.
    """
    status = DiscoveryStatus.from_result(discovery.last_result)
    return QueueListResponse(
        populated=registry.populated,
        discovery=status.state,
        discovery_error=status.reason,
        queues=await summarize_all(
            registry.current(), max_concurrency=app_settings.counts_max_concurrency
        ),
    )


@router.get("/discovery", response_model=DiscoveryStatus)
async def get_discovery_status(
    discovery: DiscoveryService = Depends(get_discovery_service),
) -> DiscoveryStatus:
    """Get the result of the most recent discovery pass."""
    return DiscoveryStatus.from_result(discovery.last_result)


@router.post("/queues/refresh", response_model=DiscoveryStatus)
async def refresh_queues(
    discovery: DiscoveryService = Depends(get_discovery_service),
) -> DiscoveryStatus:
    """Run a new discovery pass and replace the registry."""
    result = await discovery.run()
    if isinstance(result, DiscoveryFailed):
        raise DiscoveryError(result.reason)
    return DiscoveryStatus.from_result(result)


@router.post(
    "/clean-all-queues",
    response_model=BulkResetResult,
    response_model_exclude_none=True,
    responses={500: {"model": BulkResetResult}},
)
async def clean_all_queues(
    executor: BulkResetExecutor = Depends(get_bulk_reset_executor),
) -> BulkResetResult | JSONResponse:
    """Obliterate every registered queue.

    Always returns the per-queue outcomes. A 500 means the batch could not be
    attempted at all; individual queue failures are reported in ``perQueue``.
    """
    result = await executor.reset_all()
    if not result.overall_attempted:
        return JSONResponse(
            status_code=500,
            content=result.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
    return result
